"""create user_state table

Revision ID: 3c7a9e51d2b0
Revises:
Create Date: 2025-09-02 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c7a9e51d2b0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    # The app may already have created the table at startup
    if 'user_state' in insp.get_table_names():
        return
    op.create_table(
        'user_state',
        sa.Column('wallet', sa.Text(), primary_key=True),
        sa.Column('credits', sa.Numeric(), nullable=True, server_default='0'),
        sa.Column('pendingtbt', sa.Text(), nullable=True, server_default='0'),
    )


def downgrade():
    op.drop_table('user_state')
