import pydantic


class APIBaseModel(pydantic.BaseModel):
    """Base model for report output."""

    # NaN and infinite floats, such as the p-value of an exact fit, are written as null.
    model_config = pydantic.ConfigDict(extra="ignore", ser_json_inf_nan="null")
