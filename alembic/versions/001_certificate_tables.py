"""Certificate tables

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # training, registration, registration_participant, users and roles
    # are owned by the training administration schema.
    op.create_table(
        'certificate',
        sa.Column('certificate_id', sa.String(64), nullable=False),
        sa.Column('certificate_number', sa.String(255), nullable=False),
        sa.Column('registration_participant_id', sa.String(64), nullable=False),
        sa.Column('issued_date', sa.Date(), nullable=False),
        sa.Column('expired_date', sa.Date(), nullable=True),
        sa.Column('cert_file', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(
            ['registration_participant_id'],
            ['registration_participant.registration_participant_id'],
        ),
        sa.PrimaryKeyConstraint('certificate_id'),
        sa.UniqueConstraint('certificate_number', name='uq_certificate_number'),
        sa.UniqueConstraint('registration_participant_id', name='uq_certificate_participant'),
    )

    op.create_table(
        'user_certificates',
        sa.Column('user_certificate_id', sa.String(64), nullable=False),
        sa.Column('user_id', sa.String(128), nullable=True),
        sa.Column('fullname', sa.String(255), nullable=False),
        sa.Column('cert_type', sa.String(255), nullable=False),
        sa.Column('issuer', sa.String(255), nullable=False),
        sa.Column('issued_date', sa.Date(), nullable=False),
        sa.Column('expired_date', sa.Date(), nullable=True),
        sa.Column('certificate_number', sa.String(255), nullable=False),
        sa.Column('original_number', sa.String(255), nullable=True),
        sa.Column('cert_file', postgresql.ARRAY(sa.Text()), nullable=False),
        sa.Column('status', sa.SmallInteger(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('verified_by', sa.String(128), nullable=True),
        sa.Column('verification_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('user_certificate_id'),
    )
    op.create_index('ix_user_certificates_user_id', 'user_certificates', ['user_id'])
    op.create_index('ix_user_certificates_status', 'user_certificates', ['status'])
    # At most one accepted row per number
    op.create_index(
        'uq_user_certificates_accepted_number',
        'user_certificates',
        ['certificate_number'],
        unique=True,
        postgresql_where=sa.text('status = 2'),
    )


def downgrade() -> None:
    op.drop_index('uq_user_certificates_accepted_number', table_name='user_certificates')
    op.drop_index('ix_user_certificates_status', table_name='user_certificates')
    op.drop_index('ix_user_certificates_user_id', table_name='user_certificates')
    op.drop_table('user_certificates')
    op.drop_table('certificate')
