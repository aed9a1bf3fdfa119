"""Initial hiring pipeline schema

Revision ID: 0001_initial
Revises: None
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(120), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(30), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'experiences',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(120), nullable=False, unique=True),
        sa.Column('active', sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_experiences_active', 'experiences', ['active'])

    op.create_table(
        'jobs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('job_id', sa.String(8), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('designation', sa.String(200), nullable=False),
        sa.Column('salary_range', sa.String(100), nullable=False),
        sa.Column('job_description', sa.Text(), nullable=False),
        sa.Column('experience_in_year', sa.String(50)),
        sa.Column('task_link', sa.String(500)),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_by_id', sa.Integer(), sa.ForeignKey('users.id')),
        *_timestamps(),
    )
    op.create_index('ix_jobs_job_id', 'jobs', ['job_id'], unique=True)
    op.create_index('ix_jobs_is_active', 'jobs', ['is_active'])

    op.create_table(
        'candidates',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('application_id', sa.String(40), nullable=False),
        sa.Column('job_pk', sa.Integer(), sa.ForeignKey('jobs.id'), nullable=False),
        sa.Column('name', sa.String(120), nullable=False),
        sa.Column('email', sa.String(254), nullable=False),
        sa.Column('phone', sa.String(40), nullable=False),
        sa.Column('cv_file_path', sa.String(500), nullable=False),
        sa.Column('reference_id', sa.Integer(), sa.ForeignKey('users.id')),
        sa.Column('years_of_experience', sa.Float(), nullable=False),
        sa.Column('expected_salary', sa.Float(), nullable=False),
        sa.Column('notice_period_in_months', sa.Integer(), nullable=False),
        sa.Column('task_submission', sa.JSON(), nullable=False),
        sa.Column('task_submitted_at', sa.DateTime()),
        sa.Column('evaluation_score', sa.Integer()),
        sa.Column('evaluated_by_id', sa.Integer(), sa.ForeignKey('users.id')),
        sa.Column('evaluated_at', sa.DateTime()),
        sa.Column('evaluation_comments', sa.Text()),
        # FK to interviews is added once that table exists
        sa.Column('current_interview_id', sa.Integer()),
        sa.Column('interview_scheduled_date', sa.DateTime()),
        sa.Column('interview_interviewer_id', sa.Integer(), sa.ForeignKey('users.id')),
        sa.Column('interview_location', sa.String(20)),
        sa.Column('interview_meeting_link', sa.String(500)),
        sa.Column('interview_result', sa.String(20)),
        sa.Column('interview_feedback', sa.Text()),
        sa.Column('interview_completed_at', sa.DateTime()),
        sa.Column('selected', sa.Boolean(), nullable=False),
        sa.Column('offer_letter_path', sa.String(500)),
        sa.Column('selected_by_id', sa.Integer(), sa.ForeignKey('users.id')),
        sa.Column('selected_at', sa.DateTime()),
        sa.Column('status', sa.String(30), nullable=False),
        sa.Column('version_id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('email', 'job_pk', name='uq_candidates_email_job'),
    )
    op.create_index('ix_candidates_application_id', 'candidates', ['application_id'], unique=True)
    op.create_index('ix_candidates_job_pk', 'candidates', ['job_pk'])
    op.create_index('ix_candidates_email', 'candidates', ['email'])
    op.create_index('ix_candidates_status', 'candidates', ['status'])

    op.create_table(
        'interviews',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('candidate_id', sa.Integer(), sa.ForeignKey('candidates.id', ondelete='CASCADE'), nullable=False),
        sa.Column('job_pk', sa.Integer(), sa.ForeignKey('jobs.id'), nullable=False),
        sa.Column('scheduled_date', sa.DateTime(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('interviewer_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('scheduled_by_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('interview_type', sa.String(20), nullable=False),
        sa.Column('location', sa.String(20), nullable=False),
        sa.Column('meeting_link', sa.String(500)),
        sa.Column('notes', sa.Text()),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('result', sa.String(20), nullable=False),
        sa.Column('feedback', sa.Text()),
        sa.Column('score', sa.Integer()),
        sa.Column('completed_at', sa.DateTime()),
        sa.Column('completed_by_id', sa.Integer(), sa.ForeignKey('users.id')),
        sa.Column('cancelled_at', sa.DateTime()),
        sa.Column('cancelled_by_id', sa.Integer(), sa.ForeignKey('users.id')),
        sa.Column('cancellation_reason', sa.Text()),
        sa.Column('rescheduled_at', sa.DateTime()),
        sa.Column('rescheduled_by_id', sa.Integer(), sa.ForeignKey('users.id')),
        *_timestamps(),
    )
    op.create_index('ix_interviews_candidate_id', 'interviews', ['candidate_id'])
    op.create_index('ix_interviews_scheduled_date', 'interviews', ['scheduled_date'])
    op.create_index('ix_interviews_interviewer_id', 'interviews', ['interviewer_id'])
    op.create_index('ix_interviews_status', 'interviews', ['status'])

    with op.batch_alter_table('candidates') as batch:
        batch.create_foreign_key('fk_candidates_current_interview', 'interviews',
                                 ['current_interview_id'], ['id'])

    op.create_table(
        'candidate_experiences',
        sa.Column('candidate_id', sa.Integer(), sa.ForeignKey('candidates.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('experience_id', sa.Integer(), sa.ForeignKey('experiences.id'), primary_key=True),
    )

    op.create_table(
        'talents',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('talent_pool_id', sa.String(8), nullable=False),
        sa.Column('name', sa.String(120), nullable=False),
        sa.Column('email', sa.String(254), nullable=False),
        sa.Column('phone', sa.String(40), nullable=False),
        sa.Column('cv_file_path', sa.String(500), nullable=False),
        sa.Column('reference_id', sa.Integer(), sa.ForeignKey('users.id')),
        sa.Column('years_of_experience', sa.Float(), nullable=False),
        sa.Column('expected_salary', sa.Float(), nullable=False),
        sa.Column('notice_period_in_months', sa.Integer(), nullable=False),
        sa.Column('current_employment_status', sa.Boolean(), nullable=False),
        sa.Column('current_company_name', sa.String(200)),
        sa.Column('write_about_yourself', sa.Text()),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('submission_date', sa.DateTime(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_talents_talent_pool_id', 'talents', ['talent_pool_id'], unique=True)
    op.create_index('ix_talents_email', 'talents', ['email'])
    op.create_index('ix_talents_is_active', 'talents', ['is_active'])

    op.create_table(
        'talent_experiences',
        sa.Column('talent_id', sa.Integer(), sa.ForeignKey('talents.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('experience_id', sa.Integer(), sa.ForeignKey('experiences.id'), primary_key=True),
    )

    op.create_table(
        'status_changes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('candidate_id', sa.Integer(), nullable=False),
        sa.Column('application_id', sa.String(40)),
        sa.Column('operation', sa.String(40), nullable=False),
        sa.Column('from_status', sa.String(30)),
        sa.Column('to_status', sa.String(30)),
        sa.Column('actor_id', sa.Integer(), sa.ForeignKey('users.id')),
        sa.Column('note', sa.Text()),
        *_timestamps(),
    )
    op.create_index('ix_status_changes_candidate_id', 'status_changes', ['candidate_id'])
    op.create_index('ix_status_changes_application_id', 'status_changes', ['application_id'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('candidate_id', sa.Integer()),
        sa.Column('event', sa.String(40), nullable=False),
        sa.Column('type', sa.String(50)),
        sa.Column('sent_to', sa.String(255)),
        sa.Column('subject', sa.String(255)),
        sa.Column('body', sa.Text()),
        sa.Column('status', sa.String(20)),
        sa.Column('error', sa.Text()),
        sa.Column('provider_message_id', sa.String(255)),
        sa.Column('sent_at', sa.DateTime()),
        *_timestamps(),
    )
    op.create_index('ix_notifications_candidate_id', 'notifications', ['candidate_id'])


def downgrade() -> None:
    op.drop_table('notifications')
    op.drop_table('status_changes')
    op.drop_table('talent_experiences')
    op.drop_table('talents')
    op.drop_table('candidate_experiences')
    with op.batch_alter_table('candidates') as batch:
        batch.drop_constraint('fk_candidates_current_interview', type_='foreignkey')
    op.drop_table('interviews')
    op.drop_table('candidates')
    op.drop_table('jobs')
    op.drop_table('experiences')
    op.drop_table('users')
