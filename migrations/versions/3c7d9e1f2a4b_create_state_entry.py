"""create state_entry key-value table

Revision ID: 3c7d9e1f2a4b
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c7d9e1f2a4b'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    if 'state_entry' in set(insp.get_table_names()):
        return
    op.create_table(
        'state_entry',
        sa.Column('key', sa.String(length=255), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('expires_at', sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint('key'),
    )
    with op.batch_alter_table('state_entry') as batch_op:
        batch_op.create_index(batch_op.f('ix_state_entry_expires_at'), ['expires_at'], unique=False)


def downgrade():
    with op.batch_alter_table('state_entry') as batch_op:
        batch_op.drop_index(batch_op.f('ix_state_entry_expires_at'))
    op.drop_table('state_entry')
