from datetime import date

from pydantic import Field

from sitebuilder.models.base import RecordModel


class SiteOptions(RecordModel):
    include_llms_txt: bool = True
    include_humans_txt: bool = True
    year: int = Field(
        default_factory=lambda: date.today().year,
        description="Year printed in the page footer; fix it for reproducible output.",
    )
