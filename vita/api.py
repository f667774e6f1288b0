"""
HTTP transport for resume generation.

    GET  /resume           health check
    POST /resume/generate  multipart form: data (JSON string), photo (image file)

Generation failures are reported with a generic message; compiler diagnostics
and filesystem paths only go to the server log.
"""

import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import PlainTextResponse, Response
from loguru import logger

from vita import __version__
from vita.contexts.intake import discard_photo, parse_resume_json, persist_photo
from vita.contexts.rendering.compiler import LATEX_COMPILER
from vita.exceptions import InvalidResumeDataError, ResumeGenerationError
from vita.pipeline import generate_pdf
from vita.utils.logger import setup_logger

load_dotenv()
LOGS_PATH = os.getenv("LOGS_PATH")
PDF_FILENAME = os.getenv("PDF_FILENAME", "resume.pdf")

router = APIRouter(prefix="/resume")


@router.get("", response_class=PlainTextResponse)
def hello() -> str:
    return "Hello from VITA"


# Plain def: FastAPI runs it in the threadpool, compile_document blocks
@router.post("/generate", response_class=Response)
def generate(data: str = Form(...), photo: UploadFile = File(...)) -> Response:
    """Generate a resume PDF from JSON data and an uploaded photo."""
    logger.info("Received request to generate PDF.")

    try:
        resume = parse_resume_json(data)
    except InvalidResumeDataError as e:
        logger.warning(f"Rejected resume data: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    photo_path = None
    try:
        try:
            photo_path = persist_photo(photo.file, photo.filename)
        except InvalidResumeDataError as e:
            raise HTTPException(status_code=400, detail=str(e))

        pdf_bytes = generate_pdf(resume.with_photo(str(photo_path)))
    except ResumeGenerationError as e:
        logger.exception(f"Failed to generate PDF ({e.kind})")
        raise HTTPException(status_code=500, detail="Failed to generate PDF")
    except OSError as e:
        logger.exception(f"Failed to store uploaded photo: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate PDF")
    finally:
        discard_photo(photo_path)

    logger.info("PDF generated successfully.")
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{PDF_FILENAME}"'},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logger(
        context_name="api",
        log_dir=Path(LOGS_PATH) if LOGS_PATH else None,
        extra_provenance={"LaTeX compiler": LATEX_COMPILER},
    )
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="VITA resume generator", version=__version__, lifespan=lifespan)
    app.include_router(router)
    return app


app = create_app()
