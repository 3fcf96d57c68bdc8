from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from market_research.errors import ServiceError, ValidationError
from market_research.extractor import ReportExtractor
from market_research.models import Report, ResearchRequest
from market_research.orchestrator import SessionOrchestrator
from market_research.prompts import PRESET_QUERIES

router = APIRouter()


class ResearchBody(BaseModel):
    subject_description: str
    query: str


class ExtractBody(BaseModel):
    raw_text: str


class ReportResponse(BaseModel):
    overview: str
    competitors: str
    pain_points: str
    recommendations: str
    pitch_outline: str
    raw_text: str

    @classmethod
    def from_report(cls, report: Report) -> "ReportResponse":
        return cls(
            overview=report.overview,
            competitors=report.competitors,
            pain_points=report.pain_points,
            recommendations=report.recommendations,
            pitch_outline=report.pitch_outline,
            raw_text=report.raw_text,
        )


def get_orchestrator() -> SessionOrchestrator:
    return SessionOrchestrator()


@router.get("/presets", response_model=list[str])
async def presets():
    return PRESET_QUERIES


@router.post("/research", response_model=ReportResponse)
def research(body: ResearchBody, orchestrator: SessionOrchestrator = Depends(get_orchestrator)):
    request = ResearchRequest(subject_description=body.subject_description, query=body.query)
    try:
        raw_text = orchestrator.run(request)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ServiceError as e:
        return JSONResponse(
            status_code=502,
            content={"detail": f"Research failed: {e}", "status_code": e.status_code},
        )
    return ReportResponse.from_report(ReportExtractor().extract(raw_text))


@router.post("/extract", response_model=ReportResponse)
async def extract(body: ExtractBody):
    return ReportResponse.from_report(ReportExtractor().extract(body.raw_text))
