"""interview_engine_baseline

Revision ID: 5c1e7a9d3b20
Revises: 
Create Date: 2026-10-17 10:12:41.508213

Creates the candidate, role profile, resume and interview session tables.
Tables that already exist are left untouched.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '5c1e7a9d3b20'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def upgrade() -> None:
    if not table_exists('users'):
        op.create_table('users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('full_name', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=True),
            sa.Column('password_hash', sa.String(), nullable=True),
            sa.Column('experience_level', sa.String(), nullable=True),
            sa.Column('experience_years', sa.Integer(), nullable=True),
            sa.Column('education_degree', sa.String(), nullable=True),
            sa.Column('college', sa.String(), nullable=True),
            sa.Column('domains', sa.JSON(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
        op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)

    if not table_exists('role_profiles'):
        op.create_table('role_profiles',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('role_name', sa.String(), nullable=False),
            sa.Column('company_name', sa.String(), nullable=True),
            sa.Column('domain_tags', sa.JSON(), nullable=False),
            sa.Column('skill_expectations', sa.JSON(), nullable=False),
            sa.Column('interview_structures', sa.JSON(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_role_profiles_id'), 'role_profiles', ['id'], unique=False)
        op.create_index(op.f('ix_role_profiles_role_name'), 'role_profiles', ['role_name'], unique=True)

    if not table_exists('resumes'):
        op.create_table('resumes',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('filename', sa.String(), nullable=True),
            sa.Column('skills', sa.JSON(), nullable=False),
            sa.Column('projects', sa.JSON(), nullable=False),
            sa.Column('education', sa.JSON(), nullable=False),
            sa.Column('keywords', sa.JSON(), nullable=False),
            sa.Column('experience_years', sa.Integer(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_resume_user_created', 'resumes', ['user_id', 'created_at'], unique=False)
        op.create_index(op.f('ix_resumes_user_id'), 'resumes', ['user_id'], unique=False)

    if not table_exists('interview_sessions'):
        op.create_table('interview_sessions',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('role_profile_id', sa.Integer(), nullable=False),
            sa.Column('resume_id', sa.Integer(), nullable=True),
            sa.Column('mode', sa.String(), nullable=False),
            sa.Column('status', sa.String(), nullable=False),
            sa.Column('proctored', sa.Boolean(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.ForeignKeyConstraint(['role_profile_id'], ['role_profiles.id'], ),
            sa.ForeignKeyConstraint(['resume_id'], ['resumes.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_session_user_created', 'interview_sessions', ['user_id', 'created_at'], unique=False)
        op.create_index(op.f('ix_interview_sessions_id'), 'interview_sessions', ['id'], unique=False)
        op.create_index(op.f('ix_interview_sessions_user_id'), 'interview_sessions', ['user_id'], unique=False)
        op.create_index(op.f('ix_interview_sessions_role_profile_id'), 'interview_sessions', ['role_profile_id'], unique=False)
        op.create_index(op.f('ix_interview_sessions_status'), 'interview_sessions', ['status'], unique=False)

    if not table_exists('interview_rounds'):
        op.create_table('interview_rounds',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('session_id', sa.Integer(), nullable=False),
            sa.Column('position', sa.Integer(), nullable=False),
            sa.Column('round_type', sa.String(), nullable=False),
            sa.Column('difficulty', sa.String(), nullable=True),
            sa.ForeignKeyConstraint(['session_id'], ['interview_sessions.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('session_id', 'round_type', name='uq_round_session_type')
        )
        op.create_index(op.f('ix_interview_rounds_id'), 'interview_rounds', ['id'], unique=False)
        op.create_index(op.f('ix_interview_rounds_session_id'), 'interview_rounds', ['session_id'], unique=False)

    if not table_exists('interview_questions'):
        op.create_table('interview_questions',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('round_id', sa.Integer(), nullable=False),
            sa.Column('position', sa.Integer(), nullable=False),
            sa.Column('question_id', sa.String(), nullable=False),
            sa.Column('text', sa.Text(), nullable=False),
            sa.Column('difficulty', sa.String(), nullable=True),
            sa.Column('expected_keywords', sa.JSON(), nullable=False),
            sa.Column('time_minutes', sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(['round_id'], ['interview_rounds.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('round_id', 'question_id', name='uq_question_round_qid')
        )
        op.create_index(op.f('ix_interview_questions_id'), 'interview_questions', ['id'], unique=False)
        op.create_index(op.f('ix_interview_questions_round_id'), 'interview_questions', ['round_id'], unique=False)

    if not table_exists('interview_answers'):
        op.create_table('interview_answers',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('session_id', sa.Integer(), nullable=False),
            sa.Column('round_id', sa.Integer(), nullable=False),
            sa.Column('round_type', sa.String(), nullable=False),
            sa.Column('question_id', sa.String(), nullable=False),
            sa.Column('answer_text', sa.Text(), nullable=False),
            sa.Column('started_at', sa.DateTime(), nullable=True),
            sa.Column('submitted_at', sa.DateTime(), nullable=False),
            sa.Column('time_spent_seconds', sa.Integer(), nullable=False),
            sa.Column('score', sa.Integer(), nullable=True),
            sa.Column('feedback_text', sa.Text(), nullable=False),
            sa.Column('strengths', sa.JSON(), nullable=False),
            sa.Column('weaknesses', sa.JSON(), nullable=False),
            sa.Column('improvement_tips', sa.JSON(), nullable=False),
            sa.Column('score_breakdown', sa.JSON(), nullable=True),
            sa.Column('is_placeholder', sa.Boolean(), nullable=False),
            sa.ForeignKeyConstraint(['session_id'], ['interview_sessions.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['round_id'], ['interview_rounds.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('session_id', 'round_type', 'question_id', name='uq_answer_session_round_question')
        )
        op.create_index(op.f('ix_interview_answers_id'), 'interview_answers', ['id'], unique=False)
        op.create_index(op.f('ix_interview_answers_session_id'), 'interview_answers', ['session_id'], unique=False)
        op.create_index(op.f('ix_interview_answers_round_id'), 'interview_answers', ['round_id'], unique=False)


def downgrade() -> None:
    op.drop_table('interview_answers')
    op.drop_table('interview_questions')
    op.drop_table('interview_rounds')
    op.drop_table('interview_sessions')
    op.drop_table('resumes')
    op.drop_table('role_profiles')
    op.drop_table('users')
