"""create pet tables

Revision ID: 3f1c2a9d7b40
Revises:
Create Date: 2026-10-18 15:45:00.000000

Creates pets, pet_members, pet_files, pet_vaccine_records and
platform_owners. Constraint names follow the naming convention declared on
petcare.db.base.Base so autogenerate stays quiet afterwards.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "pets",
        sa.Column("pet_id", sa.Uuid(), nullable=False),
        sa.Column("owner_user_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("species", sa.String(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("primary_photo_storage_id", sa.String(), nullable=True),
        sa.Column("sex", sa.String(), nullable=True),
        sa.Column("is_spayed_neutered", sa.Boolean(), nullable=True),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("approx_age_years", sa.Float(), nullable=True),
        sa.Column("breed_primary", sa.String(), nullable=True),
        sa.Column("breed_secondary", sa.String(), nullable=True),
        sa.Column("size", sa.String(), nullable=True),
        sa.Column("weight_lbs", sa.Float(), nullable=True),
        sa.Column("color_primary", sa.String(), nullable=True),
        sa.Column("color_secondary", sa.String(), nullable=True),
        sa.Column("distinctive_marks", sa.String(), nullable=True),
        sa.Column("microchip_id", sa.String(), nullable=True),
        sa.Column("microchip_registry", sa.String(), nullable=True),
        sa.Column("license", sa.JSON(), nullable=False),
        sa.Column("temperament_tags", sa.JSON(), nullable=False),
        sa.Column("handling_notes", sa.String(), nullable=True),
        sa.Column("good_with", sa.JSON(), nullable=False),
        sa.Column("medical_summary", sa.String(), nullable=True),
        sa.Column("allergies", sa.JSON(), nullable=True),
        sa.Column("medications", sa.JSON(), nullable=True),
        sa.Column("special_needs", sa.String(), nullable=True),
        sa.Column("contacts", sa.JSON(), nullable=False),
        sa.Column("share_settings", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("pet_id", name="pk_pets"),
        sa.UniqueConstraint("slug", name="uq_pets_slug"),
    )
    op.create_index("ix_pets_owner_user_id", "pets", ["owner_user_id"])
    op.create_index("ix_pets_microchip_id", "pets", ["microchip_id"])

    op.create_table(
        "pet_members",
        sa.Column("member_id", sa.Uuid(), nullable=False),
        sa.Column("pet_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("role", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["pet_id"], ["pets.pet_id"], name="fk_pet_members_pet_id_pets", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("member_id", name="pk_pet_members"),
        sa.UniqueConstraint("pet_id", "user_id", name="uq_pet_members_pet_id_user_id"),
    )
    op.create_index("ix_pet_members_pet_id", "pet_members", ["pet_id"])
    op.create_index("ix_pet_members_user_id", "pet_members", ["user_id"])

    op.create_table(
        "pet_files",
        sa.Column("file_id", sa.Uuid(), nullable=False),
        sa.Column("pet_id", sa.Uuid(), nullable=False),
        sa.Column("storage_id", sa.String(), nullable=False),
        sa.Column("kind", sa.String(), nullable=False),
        sa.Column("doc_type", sa.String(), nullable=True),
        sa.Column("visibility", sa.String(), nullable=False),
        sa.Column("label", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["pet_id"], ["pets.pet_id"], name="fk_pet_files_pet_id_pets", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("file_id", name="pk_pet_files"),
    )
    op.create_index("ix_pet_files_pet_id", "pet_files", ["pet_id"])
    op.create_index("ix_pet_files_pet_id_kind", "pet_files", ["pet_id", "kind"])

    op.create_table(
        "pet_vaccine_records",
        sa.Column("record_id", sa.Uuid(), nullable=False),
        sa.Column("pet_id", sa.Uuid(), nullable=False),
        sa.Column("vaccine_type", sa.String(), nullable=False),
        sa.Column("administered_at", sa.DateTime(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=True),
        sa.Column("provider_name", sa.String(), nullable=True),
        sa.Column("document_storage_id", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["pet_id"], ["pets.pet_id"], name="fk_pet_vaccine_records_pet_id_pets", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("record_id", name="pk_pet_vaccine_records"),
    )
    op.create_index("ix_pet_vaccine_records_pet_id", "pet_vaccine_records", ["pet_id"])
    op.create_index(
        "ix_pet_vaccine_records_pet_id_expires_at",
        "pet_vaccine_records",
        ["pet_id", "expires_at"],
    )

    op.create_table(
        "platform_owners",
        sa.Column("platform_owner_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("platform_owner_id", name="pk_platform_owners"),
        sa.UniqueConstraint("user_id", name="uq_platform_owners_user_id"),
    )


def downgrade() -> None:
    op.drop_table("platform_owners")
    op.drop_index("ix_pet_vaccine_records_pet_id_expires_at", table_name="pet_vaccine_records")
    op.drop_index("ix_pet_vaccine_records_pet_id", table_name="pet_vaccine_records")
    op.drop_table("pet_vaccine_records")
    op.drop_index("ix_pet_files_pet_id_kind", table_name="pet_files")
    op.drop_index("ix_pet_files_pet_id", table_name="pet_files")
    op.drop_table("pet_files")
    op.drop_index("ix_pet_members_user_id", table_name="pet_members")
    op.drop_index("ix_pet_members_pet_id", table_name="pet_members")
    op.drop_table("pet_members")
    op.drop_index("ix_pets_microchip_id", table_name="pets")
    op.drop_index("ix_pets_owner_user_id", table_name="pets")
    op.drop_table("pets")
