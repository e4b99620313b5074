from pydantic import BaseModel, ConfigDict, Field, field_validator


class RegistrySubject(BaseModel):
    model_config = ConfigDict(frozen=True)

    subject: str = Field(min_length=1, max_length=200)
    teachers: list[str] = Field(default_factory=list)


class SubjectCreate(BaseModel):
    subject: str = Field(min_length=1, max_length=200)

    @field_validator("subject")
    @classmethod
    def strip_subject(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("subject must not be blank")
        return stripped


class TeacherCreate(BaseModel):
    teacherName: str = Field(min_length=1, max_length=200)

    @field_validator("teacherName")
    @classmethod
    def strip_teacher(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("teacherName must not be blank")
        return stripped
