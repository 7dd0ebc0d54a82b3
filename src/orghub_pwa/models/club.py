from pydantic import BaseModel, ConfigDict, Field


class Club(BaseModel):
    """A club with a canonical identifier and fully defaulted display fields."""

    model_config = ConfigDict(frozen=True)  # Make instances immutable

    club_id: str = Field(..., min_length=1, pattern=r"^[a-z0-9_-]+$")
    name: str
    short_name: str
    theme_color: str
    background_color: str
