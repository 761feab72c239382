from typing import Literal, Optional
from pydantic import Field
from shared.schemas import CamelModel


class DatabaseStatus(CamelModel):
    current_database: str
    raw_db_url: str
    raw_shadow_db_url: str


class FeatureStatus(CamelModel):
    feature_name: str
    is_applied: bool


class ManageFeatureRequest(CamelModel):
    action: Literal["apply", "revert"]
    feature_name: str = Field(min_length=1, pattern=r"^[A-Za-z0-9_.-]+$")


class SwitchDbRequest(CamelModel):
    main_connection_string: str = Field(min_length=1)
    shadow_connection_string: Optional[str] = None


class ScriptResult(CamelModel):
    message: str
    output: str
