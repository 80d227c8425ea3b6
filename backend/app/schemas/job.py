from pydantic import BaseModel, ConfigDict, Field


class CompanyIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, max_length=255)
    contact_email: str | None = Field(default=None, alias="contactEmail", max_length=255)
    contact_phone: str | None = Field(default=None, alias="contactPhone", max_length=50)

    def to_document(self) -> dict:
        """Embedded sub-record as stored on the job (wire-format keys)."""
        return {
            "name": self.name.strip() if self.name else self.name,
            "contactEmail": self.contact_email,
            "contactPhone": self.contact_phone,
        }


class JobCreate(BaseModel):
    title: str | None = Field(default=None, max_length=255)
    type: str | None = Field(default=None, max_length=100)
    description: str | None = None
    location: str | None = Field(default=None, max_length=255)
    salary: float | None = Field(default=None, ge=0)
    company: CompanyIn | None = None


class JobUpdate(BaseModel):
    """Partial update: only the fields present in the request body are applied."""

    title: str | None = Field(default=None, max_length=255)
    type: str | None = Field(default=None, max_length=100)
    description: str | None = None
    location: str | None = Field(default=None, max_length=255)
    salary: float | None = Field(default=None, ge=0)
    company: CompanyIn | None = None
