from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ServiceAccountKey(BaseModel):
    """Subset of a Google service-account JSON key file used by the harness"""

    model_config = ConfigDict(extra="ignore")

    type: Optional[str] = Field(None, description="Credential type, normally 'service_account'")
    project_id: Optional[str] = Field(None, description="Project owning the service account")
    client_email: str = Field(..., min_length=1, description="Service account identity")
    client_id: Optional[str] = None
