"""
Tool input schemas and backend read models.

Input models reject bad arguments before any backend call is made. Which
optional fields the caller actually provided is read from
``model_fields_set``; defaults never count as provided.

Each tool parameter is an ``Annotated`` type carrying its bounds and
description. The input models and the FastMCP wrappers in ``server`` share
these types, so the schema published to the host matches what is enforced.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from skald_mcp.mcp.filters import Filter

SearchMethod = Literal["chunk_semantic_search"]
IdType = Literal["memo_uuid", "reference_id"]

MAX_SHORT_TEXT = 255
MIN_SEARCH_LIMIT = 1
MAX_SEARCH_LIMIT = 50
DEFAULT_SEARCH_LIMIT = 10

ShortText = Annotated[str, StringConstraints(max_length=MAX_SHORT_TEXT)]

# --- Tool parameters ---

ProjectIdArg = Annotated[
    Optional[str], Field(description="Project UUID (required when using Token Authentication)")
]

ChatQueryArg = Annotated[str, Field(description="The question to ask your knowledge base")]
ChatFiltersArg = Annotated[
    Optional[List[Filter]], Field(description="Optional filters to narrow the search context")
]

SearchQueryArg = Annotated[str, Field(description="The search query")]
SearchMethodArg = Annotated[
    SearchMethod,
    Field(description="Search method: chunk_semantic_search (semantic search on memo chunks)"),
]
SearchLimitArg = Annotated[
    int,
    Field(
        ge=MIN_SEARCH_LIMIT,
        le=MAX_SEARCH_LIMIT,
        description="Maximum number of results to return (1-50, default 10)",
    ),
]
SearchFiltersArg = Annotated[
    Optional[List[Filter]], Field(description="Optional filters to narrow results")
]

TitleArg = Annotated[ShortText, Field(description="The title of the memo (max 255 characters)")]
ContentArg = Annotated[str, Field(description="The full content of the memo")]
MetadataArg = Annotated[Optional[Dict[str, Any]], Field(description="Custom JSON metadata")]
ReferenceIdArg = Annotated[
    Optional[ShortText],
    Field(description="External reference ID to match Skald memo UUIDs with your documents"),
]
TagsArg = Annotated[Optional[List[str]], Field(description="Tags for categorization")]
SourceArg = Annotated[
    Optional[ShortText], Field(description="Source of the content (useful for integrations)")
]

MemoIdArg = Annotated[
    str, Field(min_length=1, description="The memo UUID or client reference ID")
]
IdTypeArg = Annotated[
    IdType, Field(description="Type of identifier: memo_uuid (default) or reference_id")
]

NewTitleArg = Annotated[Optional[ShortText], Field(description="New title for the memo")]
NewContentArg = Annotated[Optional[str], Field(description="New content for the memo")]
NewMetadataArg = Annotated[Optional[Dict[str, Any]], Field(description="New metadata")]
NewClientReferenceIdArg = Annotated[
    Optional[ShortText], Field(description="New client reference ID")
]
NewSourceArg = Annotated[Optional[ShortText], Field(description="New source")]
ExpirationDateArg = Annotated[Optional[str], Field(description="New expiration date")]

PromptArg = Annotated[str, Field(description="What to generate from your knowledge base")]
RulesArg = Annotated[
    Optional[str], Field(description="Optional style or format rules for the generated content")
]
GenerateFiltersArg = Annotated[
    Optional[List[Filter]], Field(description="Optional filters to narrow the source memos")
]


class ToolInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def provided(self, name: str) -> bool:
        """True when the caller supplied ``name`` with a non-null value."""
        return name in self.model_fields_set and getattr(self, name) is not None


class ChatToolInput(ToolInput):
    query: ChatQueryArg
    project_id: ProjectIdArg = None
    filters: ChatFiltersArg = None


class SearchToolInput(ToolInput):
    query: SearchQueryArg
    search_method: SearchMethodArg
    limit: SearchLimitArg = DEFAULT_SEARCH_LIMIT
    filters: SearchFiltersArg = None


class CreateMemoToolInput(ToolInput):
    title: TitleArg
    content: ContentArg
    project_id: ProjectIdArg = None
    metadata: MetadataArg = None
    reference_id: ReferenceIdArg = None
    tags: TagsArg = None
    source: SourceArg = None


class MemoIdToolInput(ToolInput):
    memo_id: MemoIdArg
    id_type: IdTypeArg = "memo_uuid"


class UpdateMemoToolInput(MemoIdToolInput):
    title: NewTitleArg = None
    content: NewContentArg = None
    metadata: NewMetadataArg = None
    client_reference_id: NewClientReferenceIdArg = None
    source: NewSourceArg = None
    expiration_date: ExpirationDateArg = None


class GenerateToolInput(ToolInput):
    prompt: PromptArg
    rules: RulesArg = None
    filters: GenerateFiltersArg = None


# --- Backend read models ---

class _ReadModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class MemoTag(_ReadModel):
    tag: str


class MemoChunk(_ReadModel):
    chunk_index: int
    chunk_content: str = ""


class Memo(_ReadModel):
    uuid: str
    title: str = ""
    content: Optional[str] = None
    summary: Optional[str] = None
    tags: List[MemoTag] = Field(default_factory=list)
    client_reference_id: Optional[str] = None
    source: Optional[str] = None
    type: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    chunks: List[MemoChunk] = Field(default_factory=list)


class SearchResult(_ReadModel):
    title: str = ""
    uuid: str
    summary: Optional[str] = None
    content_snippet: Optional[str] = None
    distance: Optional[float] = None


class SearchResponse(_ReadModel):
    results: List[SearchResult] = Field(default_factory=list)


class StatusResponse(_ReadModel):
    ok: bool = False
