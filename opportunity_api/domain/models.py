from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import String, Text
import uuid

class Base(DeclarativeBase):
    pass

class Workspace(Base):
    __tablename__ = "Workspace"
    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String, default="Workspace")
    # JSON-encoded list of {id, name, type, options?}
    custom_field_definition: Mapped[str] = mapped_column("customFieldDefinition", Text, default="[]")

class Opportunity(Base):
    __tablename__ = "Opportunity"
    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    title: Mapped[str] = mapped_column(Text)
    # JSON-encoded mapping of field id -> {type, value}
    opportunity_data: Mapped[str] = mapped_column("opportunityData", Text, default="{}")
