"""Initial marketplace schema

Revision ID: 3f1a9c2e7b10
Revises: 
Create Date: 2026-10-18 09:12:44.118302

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2e7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # Users are provisioned by the auth service; only rating columns are written here
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('user_type', sa.String(length=20), nullable=False, server_default='client'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('notify_new_jobs', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('email_new_jobs', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('rating_average', sa.Numeric(precision=2, scale=1), nullable=False, server_default='0'),
        sa.Column('rating_count', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_index('idx_users_type_active', 'users', ['user_type', 'is_active'])

    op.create_table(
        'jobs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('client_id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.String(length=30), nullable=False),
        sa.Column('event_type', sa.String(length=30), nullable=False),
        sa.Column('event_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('event_time', sa.String(length=5), nullable=False),
        sa.Column('duration_hours', sa.Integer(), nullable=False),
        sa.Column('guest_count', sa.Integer(), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('state', sa.String(length=100), nullable=True),
        sa.Column('postal_code', sa.String(length=20), nullable=False),
        sa.Column('country', sa.String(length=100), nullable=False, server_default='UK'),
        sa.Column('budget_min', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('budget_max', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False, server_default='GBP'),
        sa.Column('negotiable', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='open'),
        sa.Column('priority', sa.String(length=10), nullable=False, server_default='medium'),
        sa.Column('accepting_applications', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('max_applications', sa.Integer(), nullable=False, server_default='10'),
        sa.Column('applications_received', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('assigned_artist_id', sa.Uuid(), nullable=True),
        sa.Column('selected_proposal_id', sa.Uuid(), nullable=True),
        sa.Column('application_deadline', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('views', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('budget_max > budget_min', name='ck_jobs_budget_range'),
        sa.CheckConstraint('max_applications BETWEEN 1 AND 20', name='ck_jobs_max_applications'),
        sa.CheckConstraint('applications_received <= max_applications', name='ck_jobs_applications_bound'),
        sa.CheckConstraint(
            '(assigned_artist_id IS NULL AND selected_proposal_id IS NULL)'
            ' OR (assigned_artist_id IS NOT NULL AND selected_proposal_id IS NOT NULL)',
            name='ck_jobs_assignment_pair',
        ),
    )
    op.create_index('ix_jobs_client_id', 'jobs', ['client_id'])
    op.create_index('ix_jobs_category', 'jobs', ['category'])
    op.create_index('ix_jobs_event_date', 'jobs', ['event_date'])
    op.create_index('ix_jobs_city', 'jobs', ['city'])
    op.create_index('ix_jobs_assigned_artist_id', 'jobs', ['assigned_artist_id'])
    op.create_index('idx_jobs_status_event_date', 'jobs', ['status', 'event_date'])
    op.create_index('idx_jobs_category_city', 'jobs', ['category', 'city'])

    op.create_table(
        'job_views',
        sa.Column('job_id', sa.Uuid(), nullable=False),
        sa.Column('artist_id', sa.Uuid(), nullable=False),
        sa.Column('viewed_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('job_id', 'artist_id'),
    )

    op.create_table(
        'proposals',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('job_id', sa.Uuid(), nullable=False),
        sa.Column('artist_id', sa.Uuid(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('total_price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False, server_default='GBP'),
        sa.Column('duration_value', sa.Integer(), nullable=False),
        sa.Column('duration_unit', sa.String(length=10), nullable=False, server_default='hours'),
        sa.Column('years_of_experience', sa.Integer(), nullable=True),
        sa.Column('relevant_experience', sa.Text(), nullable=True),
        sa.Column('cover_letter', sa.Text(), nullable=True),
        sa.Column('payment_terms', sa.Text(), nullable=True),
        sa.Column('cancellation_policy', sa.Text(), nullable=True),
        sa.Column('additional_notes', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('response_message', sa.Text(), nullable=True),
        sa.Column('responded_by', sa.Uuid(), nullable=True),
        sa.Column('responded_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('submitted_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        *_timestamps(),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_proposals_artist_id', 'proposals', ['artist_id'])
    op.create_index('uq_proposals_job_artist', 'proposals', ['job_id', 'artist_id'], unique=True)
    # At most one accepted proposal per job
    op.create_index(
        'uq_proposals_one_accepted_per_job',
        'proposals',
        ['job_id'],
        unique=True,
        postgresql_where=sa.text("status = 'accepted'"),
        sqlite_where=sa.text("status = 'accepted'"),
    )
    op.create_index('idx_proposals_job_status', 'proposals', ['job_id', 'status'])
    op.create_index('idx_proposals_artist_submitted', 'proposals', ['artist_id', 'submitted_at'])

    op.create_table(
        'reviews',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('reviewer_id', sa.Uuid(), nullable=False),
        sa.Column('reviewee_id', sa.Uuid(), nullable=False),
        sa.Column('job_id', sa.Uuid(), nullable=False),
        sa.Column('proposal_id', sa.Uuid(), nullable=True),
        sa.Column('rating_overall', sa.Integer(), nullable=False),
        sa.Column('rating_breakdown', sa.JSON(), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=True),
        sa.Column('comment', sa.Text(), nullable=False),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('would_recommend', sa.Boolean(), nullable=True),
        sa.Column('would_hire_again', sa.Boolean(), nullable=True),
        sa.Column('design_satisfaction', sa.String(length=30), nullable=True),
        sa.Column('service_highlights', sa.JSON(), nullable=False),
        sa.Column('areas_for_improvement', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='submitted'),
        sa.Column('visibility', sa.String(length=20), nullable=False, server_default='public'),
        sa.Column('verification_method', sa.String(length=30), nullable=True),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('quality_score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_high_quality', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_moderated', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('moderated_by', sa.Uuid(), nullable=True),
        sa.Column('moderated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('moderation_notes', sa.Text(), nullable=True),
        sa.Column('flags', sa.JSON(), nullable=False),
        sa.Column('response_message', sa.String(length=500), nullable=True),
        sa.Column('response_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('response_is_public', sa.Boolean(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('rating_overall BETWEEN 1 AND 5', name='ck_reviews_rating_overall'),
        sa.CheckConstraint('quality_score BETWEEN 0 AND 100', name='ck_reviews_quality_score'),
    )
    op.create_index('ix_reviews_job_id', 'reviews', ['job_id'])
    op.create_index('uq_reviews_reviewer_job', 'reviews', ['reviewer_id', 'job_id'], unique=True)
    op.create_index('idx_reviews_reviewee_status', 'reviews', ['reviewee_id', 'status'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('recipient_id', sa.Uuid(), nullable=False),
        sa.Column('type', sa.String(length=40), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('message', sa.String(length=500), nullable=False),
        sa.Column('related_job_id', sa.Uuid(), nullable=True),
        sa.Column('action_url', sa.String(length=255), nullable=True),
        sa.Column('deliver_in_app', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('deliver_email', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('priority', sa.String(length=10), nullable=False, server_default='medium'),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_notifications_expires_at', 'notifications', ['expires_at'])
    op.create_index('idx_notifications_recipient_read', 'notifications', ['recipient_id', 'is_read'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('notifications')
    op.drop_table('reviews')
    op.drop_table('proposals')
    op.drop_table('job_views')
    op.drop_table('jobs')
    op.drop_table('users')
