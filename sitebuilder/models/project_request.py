from typing import Optional

from pydantic import Field

from sitebuilder.models.base import RecordModel
from sitebuilder.models.profile import BusinessProfile
from sitebuilder.models.project import ProjectRecord


class CreateProjectRequest(RecordModel):
    profile: BusinessProfile


class ProjectRequest(RecordModel):
    project: ProjectRecord


class RenderRequest(RecordModel):
    project: ProjectRecord
    include_llms_txt: bool = True
    include_humans_txt: bool = True
    year: Optional[int] = Field(default=None, ge=1900, le=9999)
