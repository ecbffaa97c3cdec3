from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ModelBase(BaseModel):
    """
    Base class for all chat-widgets wire models.

    Models are immutable, accept both snake_case attribute names and
    camelCase wire names, ignore unknown fields and reject NaN or infinite
    floats.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
        allow_inf_nan=False,
    )


TypeId = str
ActionName = str
ThreadId = str
