from pydantic import BaseModel, Field, field_validator


class ClassRosterBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    major: str | None = Field(default=None, max_length=200)
    student_count: int = Field(ge=1, le=10000)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("Class name must not be blank")
        return name

    @field_validator("major")
    @classmethod
    def blank_major_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class ClassRosterCreate(ClassRosterBase):
    pass


class ClassRosterUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    major: str | None = Field(default=None, max_length=200)
    student_count: int | None = Field(default=None, ge=1, le=10000)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        name = value.strip()
        if not name:
            raise ValueError("Class name must not be blank")
        return name


class ClassRosterOut(ClassRosterBase):
    id: int

    model_config = {"from_attributes": True}


class ClassRosterBatchCreate(BaseModel):
    classes: list[ClassRosterCreate] = Field(default_factory=list, max_length=2000)


class ClassRosterBatchResult(BaseModel):
    success: int
    failed: int
    errors: list[str] = Field(default_factory=list)


class HeadcountRequest(BaseModel):
    class_names: str = Field(default="", alias="classNames", max_length=5000)

    model_config = {"populate_by_name": True}


class HeadcountOut(BaseModel):
    class_names: list[str]
    total: int
