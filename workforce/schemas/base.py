from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RequestModel(BaseModel):
    """Inbound bodies arrive camelCase; unknown keys are ignored."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def changed_fields(self) -> dict:
        # Keeps nested models intact so the store holds typed values
        return {name: getattr(self, name) for name in self.model_fields_set}


def reject_null(v):
    if v is None:
        raise ValueError("may not be null")
    return v
