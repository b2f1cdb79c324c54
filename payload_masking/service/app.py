import argparse
import logging
import os
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from payload_masking.config_loader import configure_logging, get_engine
from payload_masking.core import InvalidInputError, PayloadParseError

logger = logging.getLogger(__name__)


class MaskReq(BaseModel):
    transaction_id: str = Field(..., min_length=1)
    payload_txt: str


class MaskResp(BaseModel):
    transaction_id: str
    masked_payload: str
    payload_type: str


def create_app(config_path: Optional[str] = None) -> FastAPI:
    """Create the FastAPI app using the shared MaskingEngine."""

    engine = get_engine(config_path)
    app = FastAPI(title="Data Masking Service", version="1.0.0")

    @app.get("/health")
    @app.get("/api/health")
    def health():
        return {"status": "ok"}

    @app.post("/api/mask", response_model=MaskResp)
    def mask_payload(req: MaskReq):
        logger.info("Received masking request for transaction_id: %s", req.transaction_id)
        try:
            result = engine.mask(req.payload_txt)
        except InvalidInputError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except PayloadParseError as e:
            logger.warning("Transaction %s: %s", req.transaction_id, e)
            raise HTTPException(status_code=422, detail=str(e))
        except Exception as e:
            logger.exception("Error processing masking request %s", req.transaction_id)
            raise HTTPException(status_code=500, detail=str(e))
        return MaskResp(
            transaction_id=req.transaction_id,
            masked_payload=result.masked_payload,
            payload_type=result.resolved_type_label,
        )

    # Expose internals for reuse/tests
    app.state.engine = engine

    return app


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run the data masking API")
    parser.add_argument(
        "--config",
        default=os.getenv("MASKING_CONFIG_PATH", "masking_config.yaml"),
        help="Path to masking configuration file",
    )
    parser.add_argument("--host", default=os.getenv("SERVICE_HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.getenv("SERVICE_PORT", "8000")))
    parser.add_argument("--log-level", default=os.getenv("MASKING_LOG_LEVEL", "INFO"))
    args = parser.parse_args()

    configure_logging(args.log_level)
    app = create_app(args.config)
    import uvicorn

    uvicorn.run(app, host=args.host, port=args.port)
