"""
Model router for selecting the model used by each interview feature.
"""
import logging
from app.core.config import OPENAI_MODEL

logger = logging.getLogger(__name__)

# Feature -> model mapping
MODEL_ROUTING = {
    "question_generation": OPENAI_MODEL,
    "answer_evaluation": OPENAI_MODEL,
}

# Sampling temperature per feature; evaluation stays close to deterministic
TEMPERATURE_ROUTING = {
    "question_generation": 0.8,
    "answer_evaluation": 0.2,
}


def get_model_for_feature(feature: str) -> str:
    """
    Get appropriate model for a feature.
    
    Args:
        feature: Feature name ("question_generation", "answer_evaluation")
        
    Returns:
        Model identifier string
    """
    return MODEL_ROUTING.get(feature, OPENAI_MODEL)


def get_temperature_for_feature(feature: str) -> float:
    return TEMPERATURE_ROUTING.get(feature, 0.7)
