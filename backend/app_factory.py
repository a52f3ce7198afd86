from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from intake_agent.config import get_triage_policy
from intake_agent.core.logging_utils import log_event

load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    policy = get_triage_policy()  # Fail fast on bad TRIAGE_* values
    log_event(
        component="app",
        event="startup",
        details={
            "temperature_high_c": policy.temperature_high_c,
            "systolic_high": policy.systolic_high,
            "critical_symptom_count": len(policy.critical_symptoms),
        },
    )
    yield
    log_event(component="app", event="shutdown")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Intake Triage API",
        description="Triage and agent routing engine for patient intake",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, specify the frontend origin
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app
