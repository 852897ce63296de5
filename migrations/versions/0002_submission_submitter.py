"""submitter on submissions"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None

def upgrade():
    with op.batch_alter_table("submissions") as batch:
        batch.add_column(sa.Column("user_id", sa.Integer(), nullable=True))
        batch.create_foreign_key(
            "fk_submissions_user_id_users", "users", ["user_id"], ["id"], ondelete="SET NULL"
        )
        batch.create_index("ix_submissions_assignment_user", ["assignment_id", "user_id"])

def downgrade():
    with op.batch_alter_table("submissions") as batch:
        batch.drop_index("ix_submissions_assignment_user")
        batch.drop_constraint("fk_submissions_user_id_users", type_="foreignkey")
        batch.drop_column("user_id")
