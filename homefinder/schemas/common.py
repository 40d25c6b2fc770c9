from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

class BaseSchema(BaseModel):

    
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )

class TimestampSchema(BaseSchema):

    
    created_at: datetime | None = None
    updated_at: datetime | None = None

class IDSchema(BaseSchema):

    
    id: UUID

class IDTimestampSchema(IDSchema, TimestampSchema):

    
    pass
