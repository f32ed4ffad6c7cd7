from fastapi import Depends, FastAPI, File, HTTPException, Request, UploadFile
from contextlib import asynccontextmanager
from typing import Optional

from triage_service import config
from triage_service.chat import ChatIntentResolver
from triage_service.classifier import PriorityClassifier, SeedNaiveBayesClassifier
from triage_service.dataset import DatasetStore
from triage_service.errors import ChatValidationError, UploadValidationError
from triage_service.schemas import (
    ChatRequest, ChatResponse, ClearResponse, HealthResponse, PredictMeta, PredictResponse,
)
from triage_service.service import PredictionService
from triage_service.tabular import read_records, to_csv, to_rows
import logging
import traceback


seed_model = SeedNaiveBayesClassifier()
predictor = PredictionService(PriorityClassifier(seed_model))
chat_resolver = ChatIntentResolver()
logger = logging.getLogger("triage")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: train once, start with an empty dataset
    seed_model.load()
    app.state.store = DatasetStore()
    yield


app = FastAPI(
    title="Backlog Triage Service",
    version="0.1.0",
    lifespan=lifespan
)


def get_store(request: Request) -> DatasetStore:
    return request.app.state.store


@app.get("/health", response_model=HealthResponse)
def health(store: DatasetStore = Depends(get_store)):
    return HealthResponse(
        status="ok",
        modelReady=seed_model.is_ready(),
        modelVersion=seed_model.model_version,
        datasetRows=len(store),
    )


@app.get("/api/ping")
def ping():
    return {"ok": True, "message": "pong"}


@app.post("/api/predict", response_model=PredictResponse)
async def predict(
    file: Optional[UploadFile] = File(default=None),
    store: DatasetStore = Depends(get_store),
):
    try:
        if file is None:
            raise UploadValidationError("No file uploaded. Please attach a CSV file.")
        if not (file.filename or "").lower().endswith(".csv"):
            raise UploadValidationError("Invalid file type. Only .csv files are accepted.")

        data = await file.read()
        if len(data) > config.MAX_UPLOAD_BYTES:
            raise UploadValidationError(
                f"File too large. Maximum size is {config.MAX_UPLOAD_BYTES} bytes."
            )

        results = predictor.predict_batch(read_records(data))
        store.replace(results)

        return PredictResponse(
            meta=PredictMeta(count=len(results)),
            data=to_rows(results),
            csv=to_csv(results),
        )
    except UploadValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.error("Unexpected prediction error: %s", str(e))
        logger.error(traceback.format_exc())
        raise HTTPException(
            status_code=500,
            detail="Failed to process CSV. Ensure it is valid and try again.",
        )


@app.post("/api/chat", response_model=ChatResponse)
def chat(req: ChatRequest, store: DatasetStore = Depends(get_store)):
    try:
        return ChatResponse(reply=chat_resolver.reply(req.message, store.snapshot()))
    except ChatValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("Unexpected chat error: %s", str(e))
        logger.error(traceback.format_exc())
        raise HTTPException(status_code=500, detail="Chat failed. Try again.")


@app.post("/api/clear", response_model=ClearResponse)
def clear(store: DatasetStore = Depends(get_store)):
    store.clear()
    return ClearResponse()
