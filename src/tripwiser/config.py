from os import environ

from pydantic import BaseModel, ConfigDict, Field


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    aws_region: str
    dynamodb_endpoint: str | None = None
    groups_table: str
    trips_table: str
    balance_epsilon: float = Field(..., gt=0)
    share_tolerance: float = Field(..., ge=0)
    environment: str


_cached_config: Config | None = None


def _reset_config() -> None:
    """Reset cached config. For testing only."""
    global _cached_config
    _cached_config = None


def get_config() -> Config:
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    _cached_config = Config(
        aws_region=environ.get("AWS_REGION", "us-east-1"),
        dynamodb_endpoint=environ.get("DYNAMODB_ENDPOINT"),
        groups_table=environ.get("GROUPS_TABLE", "SplitlyGroups"),
        trips_table=environ.get("TRIPS_TABLE", "Trips"),
        balance_epsilon=float(environ.get("BALANCE_EPSILON", "0.005")),
        share_tolerance=float(environ.get("SHARE_TOLERANCE", "0.01")),
        environment=environ.get("ENVIRONMENT", "local"),
    )
    return _cached_config
