from __future__ import annotations

from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException
from sqlalchemy.orm import Session

from kardex.config import KardexConfig
from kardex.database import build_engine, build_session_factory, init_db
from kardex.errors import InvalidPayload, MalformedCode
from kardex.ingest import ingest_kardex
from kardex.logging_config import configure_logging


config = KardexConfig.from_env()
configure_logging(config.log_level)
engine = build_engine(config.database_url)
SessionLocal = build_session_factory(engine)
app = FastAPI(title="Kardex ingestion")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@app.on_event("startup")
def startup():
    init_db(engine)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/kardex")
def post_kardex(payload: Any = Body(...), db: Session = Depends(get_db)):
    # Raw body: the ok flag is checked before the structure is validated.
    try:
        result = ingest_kardex(db, payload, email_domain=config.email_domain)
    except InvalidPayload as exc:
        raise HTTPException(status_code=400, detail={"message": str(exc), "errors": exc.details}) from exc
    except MalformedCode as exc:
        raise HTTPException(status_code=422, detail={"message": str(exc), "code": exc.code}) from exc
    return result.model_dump(by_alias=True)
