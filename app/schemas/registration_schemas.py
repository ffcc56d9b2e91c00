from pydantic import BaseModel

from app.models.registration import RegistrationStatus

class RegistrationStatusRead(BaseModel):
    status: RegistrationStatus
