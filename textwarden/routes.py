"""
Name: Analysis API Controllers

Responsibilities:
  - Expose HTTP endpoints for text analysis, dictionary and cache management
  - Translate wire preferences into the domain Preferences value
  - Serialize issues into the extension's suggestion format

Collaborators:
  - application.use_cases.AnalyzeTextUseCase
  - container: Dependency providers
  - error_responses: OpenAPI error schemas

Notes:
  - This module stays thin (controllers only)
  - Empty or oversized text is rejected by the use case (400), not by
    the request model
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from .application import AnalysisContext
from .application.use_cases import AnalyzeTextInput, AnalyzeTextUseCase
from .container import get_analysis_context, get_analyze_text_use_case
from .domain.entities import Issue, IssueKind, Preferences
from .error_responses import OPENAPI_ERROR_RESPONSES

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)


class PreferencesReq(BaseModel):
    """R: Wire preferences (extension format)."""

    model_config = ConfigDict(populate_by_name=True)

    language: Optional[str] = Field(None, description="Locale tag, e.g. en-US")
    locale: Optional[str] = Field(None, description="Alias of language")
    check_grammar: bool = Field(True, alias="checkGrammar")
    check_spelling: bool = Field(True, alias="checkSpelling")
    check_style: bool = Field(True, alias="checkStyle")
    check_clarity: bool = Field(True, alias="checkClarity")

    def to_domain(self) -> Preferences:
        flags = {
            IssueKind.GRAMMAR: self.check_grammar,
            IssueKind.SPELLING: self.check_spelling,
            IssueKind.STYLE: self.check_style,
            IssueKind.CLARITY: self.check_clarity,
        }
        locale = (self.locale or self.language or "en-US").strip() or "en-US"
        return Preferences(
            locale=locale,
            enabled_kinds=frozenset(kind for kind, on in flags.items() if on),
        )


class AnalyzeReq(BaseModel):
    text: str = Field(..., description="Document to analyze")
    preferences: PreferencesReq = Field(default_factory=PreferencesReq)
    dictionary: Optional[list[str]] = Field(
        None, description="Replaces the user dictionary when given"
    )


class PositionRes(BaseModel):
    start: int
    end: int


class IssueRes(BaseModel):
    id: str
    type: str
    position: PositionRes
    text: str
    suggestions: list[str]
    explanation: str

    @classmethod
    def from_issue(cls, issue: Issue) -> "IssueRes":
        return cls(
            id=issue.id,
            type=issue.kind.value,
            position=PositionRes(start=issue.span.start, end=issue.span.end),
            text=issue.flagged_text,
            suggestions=list(issue.replacements),
            explanation=issue.explanation,
        )


class AnalyzeRes(BaseModel):
    suggestions: list[IssueRes]


class DictionaryReq(BaseModel):
    words: list[str] = Field(default_factory=list)


class DictionaryRes(BaseModel):
    words: list[str]
    cache_cleared: bool


class CacheClearRes(BaseModel):
    cleared: bool


@router.post("/analyze", response_model=AnalyzeRes, tags=["analysis"])
async def analyze(
    req: AnalyzeReq,
    context: AnalysisContext = Depends(get_analysis_context),
    use_case: AnalyzeTextUseCase = Depends(get_analyze_text_use_case),
):
    use_case.validate(req.text)
    if req.dictionary is not None:
        context.update_dictionary(req.dictionary)

    result = await use_case.execute(
        AnalyzeTextInput(text=req.text, preferences=req.preferences.to_domain())
    )
    return AnalyzeRes(suggestions=[IssueRes.from_issue(i) for i in result.issues])


@router.put("/dictionary", response_model=DictionaryRes, tags=["dictionary"])
def replace_dictionary(
    req: DictionaryReq, context: AnalysisContext = Depends(get_analysis_context)
):
    cleared = context.update_dictionary(req.words)
    return DictionaryRes(words=sorted(context.dictionary), cache_cleared=cleared)


@router.get("/dictionary", response_model=DictionaryRes, tags=["dictionary"])
def get_dictionary(context: AnalysisContext = Depends(get_analysis_context)):
    return DictionaryRes(words=sorted(context.dictionary), cache_cleared=False)


@router.post("/cache/clear", response_model=CacheClearRes, tags=["cache"])
def clear_cache(context: AnalysisContext = Depends(get_analysis_context)):
    context.clear_cache()
    return CacheClearRes(cleared=True)


@router.get("/cache/stats", tags=["cache"])
def cache_stats(context: AnalysisContext = Depends(get_analysis_context)) -> dict:
    return context.cache.stats()
