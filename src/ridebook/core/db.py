from pydantic import BaseModel, ConfigDict


class MongoModel(BaseModel):
    """Base for documents persisted in MongoDB; aliases carry the stored field names."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_serialization_defaults_required=True,
    )
