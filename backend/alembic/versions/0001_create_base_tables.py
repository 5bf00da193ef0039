"""create users and employees tables"""
from alembic import op
import sqlalchemy as sa

revision = "0001_create_base_tables"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("account_id", sa.String(), nullable=False),
        sa.Column("username", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False, server_default=""),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.UniqueConstraint("account_id", "username", name="uq_users_account_username"),
    )
    op.create_index("ix_users_username", "users", ["username"])
    op.create_index("ix_users_account_id", "users", ["account_id"])

    op.create_table(
        "employees",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("account_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("designation", sa.String(), nullable=False),
        sa.Column("department", sa.String(), nullable=False),
        sa.Column("salary", sa.Float(), nullable=False, server_default="0"),
        sa.Column("date_of_joining", sa.Date(), nullable=False),
        sa.Column("last_day_of_working", sa.Date(), nullable=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", name="fk_employees_user_id_users", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_employees_account_id", "employees", ["account_id"])
    op.create_index("ix_employees_name", "employees", ["name"])
    op.create_index("ix_employees_user_id", "employees", ["user_id"])
    op.create_index("ix_emp_account_created", "employees", ["account_id", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_emp_account_created", table_name="employees")
    op.drop_index("ix_employees_user_id", table_name="employees")
    op.drop_index("ix_employees_name", table_name="employees")
    op.drop_index("ix_employees_account_id", table_name="employees")
    op.drop_table("employees")
    op.drop_index("ix_users_account_id", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
