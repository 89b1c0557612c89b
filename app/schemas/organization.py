from pydantic import BaseModel


class OrgDetails(BaseModel):
    name: str = ""
    address: str = ""
    pan: str = ""
    gstin: str = ""
    registrationNumber: str = ""
    registration80G: str = ""
    registration12A: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
