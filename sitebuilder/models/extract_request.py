from pydantic import Field, HttpUrl

from sitebuilder.models.base import RecordModel

DEFAULT_UPLOAD_SOURCE_URL = "https://www.example.com/profile/"


class ExtractRequest(RecordModel):
    url: HttpUrl


class ExtractHtmlRequest(RecordModel):
    html: str = Field(min_length=1, description="A saved copy of the business profile page.")
    source_url: str = Field(
        default=DEFAULT_UPLOAD_SOURCE_URL,
        description="Where the page was saved from; used to resolve relative links and images.",
    )
