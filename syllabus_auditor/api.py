# api.py
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from pydantic import BaseModel, Field

from .config.config_loader import ConfigLoader
from .models.analysis_models import AnalysisResult, EvaluationCriteria, Language
from .models.errors import (
    DependencyUnavailableError,
    DocumentConversionError,
    StageTimeoutError,
    UnsupportedFormatError,
)
from .services.analysis_pipeline import AnalysisPipeline

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    UnsupportedFormatError: 415,
    DependencyUnavailableError: 503,
    DocumentConversionError: 422,
    StageTimeoutError: 504,
}


class TranslateRequest(BaseModel):
    result: Dict[str, Any] = Field(..., description="Report in the /analyze response format")
    language: str = Field("ar", description="Target language code, 'en' or 'ar'")


def _language(code: str) -> Language:
    try:
        return Language.from_code(code)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _raise_for(error: Exception):
    for error_type, status in ERROR_STATUS.items():
        if isinstance(error, error_type):
            logger.error(f"{error_type.__name__}: {error}")
            raise HTTPException(status_code=status, detail=str(error))
    raise error


def create_app(pipeline: Optional[AnalysisPipeline] = None) -> FastAPI:
    """Create the API app; a pipeline is built from the environment if none is given"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.pipeline is None:
            config, api_key = ConfigLoader.load_config()
            app.state.pipeline = AnalysisPipeline.from_config(config, api_key)
            logger.info(f"Pipeline ready (model: {config.model_name})")
        yield

    app = FastAPI(title="Syllabus Auditor API", version="0.1.0", lifespan=lifespan)
    app.state.pipeline = pipeline

    def get_pipeline(request: Request) -> AnalysisPipeline:
        if request.app.state.pipeline is None:
            raise HTTPException(status_code=503, detail="Analysis pipeline is not initialized")
        return request.app.state.pipeline

    @app.get("/")
    async def read_root():
        return {"message": "Syllabus Auditor API is running"}

    @app.post("/analyze")
    async def analyze_endpoint(
        request: Request,
        file: UploadFile = File(...),
        language: str = Form("en"),
        benchmark_target: str = Form(""),
        ilo_clarity: bool = Form(True),
        ilo_alignment: bool = Form(True),
        assessment_quality: bool = Form(True),
        reference_currency: bool = Form(True),
        structure_compliance: bool = Form(True),
    ):
        pipeline = get_pipeline(request)
        criteria = EvaluationCriteria(
            ilo_clarity=ilo_clarity,
            ilo_alignment=ilo_alignment,
            assessment_quality=assessment_quality,
            reference_currency=reference_currency,
            structure_compliance=structure_compliance,
            benchmark_target=benchmark_target,
        )
        logger.info(f"Analyzing upload: {file.filename} ({file.content_type})")
        try:
            result = await pipeline.run(file.file, criteria, _language(language), file.content_type)
        except HTTPException:
            raise
        except Exception as e:
            _raise_for(e)
        return result.to_dict()

    @app.post("/evaluate")
    async def evaluate_endpoint(
        request: Request,
        file: UploadFile = File(...),
        language: str = Form("en"),
    ):
        pipeline = get_pipeline(request)
        try:
            payload = await pipeline.extract(file.file, file.content_type)
            result = await pipeline.evaluate(payload, EvaluationCriteria(), _language(language))
        except HTTPException:
            raise
        except Exception as e:
            _raise_for(e)
        return result.to_dict()

    @app.post("/translate")
    async def translate_endpoint(request: Request, body: TranslateRequest):
        pipeline = get_pipeline(request)
        language = _language(body.language)
        try:
            result = await pipeline.translate(AnalysisResult.from_dict(body.result), language)
        except Exception as e:
            _raise_for(e)
        return result.to_dict()

    return app


app = create_app()
