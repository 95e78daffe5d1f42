#substation_backend/main.py
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from substation_backend.alerts import router as alerts_router
from substation_backend.assistant import router as chat_router
from substation_backend.dependencies import DashboardSession
from substation_backend.maintenance import router as task_router
from substation_backend.ui import render_dashboard

APP_TITLE = "Electrical Substation Maintenance API"


def create_app(session: Optional[DashboardSession] = None) -> FastAPI:
    app = FastAPI(title=APP_TITLE)

    # Enable CORS for a separately served frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",  # Next.js dev
            "http://127.0.0.1:3000",
            "http://localhost:5173",  # Vite dev
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # One technician workspace per process
    app.state.session = session or DashboardSession()

    @app.get("/", response_class=HTMLResponse)
    def dashboard() -> str:
        return render_dashboard("Electrical Substation Maintenance AI Assistant")

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok", "service": APP_TITLE}

    # Register routers
    app.include_router(alerts_router, prefix="/alerts", tags=["Alerts"])
    app.include_router(task_router, prefix="/task", tags=["Maintenance Task"])
    app.include_router(chat_router, prefix="/chat", tags=["Assistant"])
    return app


app = create_app()
