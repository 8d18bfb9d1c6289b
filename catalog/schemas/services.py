from sqlmodel import SQLModel


SERVICE_FIELDS = (
    "app_code",
    "app_name",
    "env",
    "cloud",
    "region",
    "team_name",
    "pm_contact",
    "team_contact",
)

FIELD_LABELS = {
    "app_code": "App Code",
    "app_name": "App Name",
    "env": "Environment",
    "cloud": "Cloud",
    "region": "Region",
    "team_name": "Team Name",
    "pm_contact": "PM Contact",
    "team_contact": "Team Contact",
}


class ServiceFields(SQLModel):
    # Blank defaults: completeness is checked by the validator, not by parsing
    app_code: str = ""
    app_name: str = ""
    env: str = ""
    cloud: str = ""
    region: str = ""
    team_name: str = ""
    pm_contact: str = ""
    team_contact: str = ""


class ServiceCreate(ServiceFields):
    pass


class ServiceUpdate(ServiceFields):
    pass


class ServiceRead(ServiceFields):
    id: int
