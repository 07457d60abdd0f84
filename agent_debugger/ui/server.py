import logging
import os
from typing import Any, Dict, Optional

import structlog
from fastapi import Body, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from agent_debugger.analysis.normalizer import normalize
from agent_debugger.analysis.prompt_fixes import generate_prompt_fixes
from agent_debugger.analysis.report import format_report, health_band, status_counts
from agent_debugger.core.exceptions import (
    CollaboratorError,
    FormatError,
    NotFoundError,
    ValidationError,
)
from agent_debugger.core.hierarchy import AgentHierarchyStore
from agent_debugger.core.models import AgentType
from agent_debugger.core.orchestrator import DiagnosticSession, resolve_collaborator
from agent_debugger.utils.config import config

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = structlog.get_logger(__name__)

app = FastAPI(title="Agent Debugger Server")

# CORS for local development (allow frontend dev server)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global State
class ServerState:
    session: Optional[DiagnosticSession] = None


state = ServerState()


# Models
class AgentCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    type: AgentType
    parent_id: Optional[str] = Field(default=None, alias="parentId")
    system_prompt: Optional[str] = Field(default=None, alias="systemPrompt")


class AnalyzeRequest(BaseModel):
    expected_behavior: str
    actual_behavior: str
    flow_description: str = ""


# Error mapping
def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return _error(400, str(exc))


@app.exception_handler(FormatError)
async def format_error_handler(request: Request, exc: FormatError):
    return _error(502, str(exc))


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return _error(404, str(exc))


@app.exception_handler(CollaboratorError)
async def collaborator_error_handler(request: Request, exc: CollaboratorError):
    return _error(502, str(exc))


class CollaboratorUnavailableError(Exception):
    """Raised when the diagnostic collaborator cannot be built from the current configuration."""


@app.exception_handler(CollaboratorUnavailableError)
async def collaborator_unavailable_handler(request: Request, exc: CollaboratorUnavailableError):
    return _error(503, str(exc))


def get_session() -> DiagnosticSession:
    """Return the active session, creating an empty one on first use."""
    if state.session is None:
        state.session = DiagnosticSession()
    return state.session


def get_analysis_session() -> DiagnosticSession:
    """Return the active session with its diagnostic collaborator resolved."""
    session = get_session()
    if session.collaborator is None:
        try:
            session.collaborator = resolve_collaborator()
        except ValueError as e:
            raise CollaboratorUnavailableError(f"Diagnostic service not configured: {e}") from e
    return session


@app.on_event("startup")
async def startup_event():
    """Initialize the analysis session."""
    logger.info("Initializing Agent Debugger Server", cwd=os.getcwd())
    try:
        get_analysis_session()
    except CollaboratorUnavailableError as e:
        logger.warning(
            "Collaborator init failed (likely missing agent API settings). "
            "Agent editing works but analysis will fail unless in mock mode.",
            error=str(e),
        )
    logger.info("Server Ready")


@app.get("/api/health")
async def health_check():
    return {
        "status": "ok",
        "mock": config.mock_mode,
        "analysis_ready": state.session is not None and state.session.collaborator is not None,
    }


@app.get("/api/agents")
async def list_agents():
    """Return the grouped agent hierarchy."""
    session = get_session()
    hierarchy = session.store.list_hierarchy()
    body = hierarchy.to_dict()
    body["agents"] = [agent.to_dict() for agent in session.store.agents]
    return body


@app.post("/api/agents", status_code=201)
async def create_agent(req: AgentCreateRequest):
    agent = get_session().add_agent(
        req.name, req.type, parent_id=req.parent_id, system_prompt=req.system_prompt
    )
    return agent.to_dict()


@app.patch("/api/agents/{agent_id}")
async def update_agent(agent_id: str, patch: Dict[str, Any] = Body(...)):
    agent = get_session().update_agent(agent_id, patch)
    return agent.to_dict()


@app.delete("/api/agents/{agent_id}")
async def delete_agent(agent_id: str, cascade: bool = False):
    """Delete an agent. The caller confirms cascading deletes before asking for one."""
    removed = get_session().remove_agent(agent_id, cascade=cascade)
    return {"removed": sorted(removed)}


@app.post("/api/analyze")
async def analyze(req: AnalyzeRequest):
    """Run the diagnostic collaborator over the current agent system."""
    response = await get_analysis_session().analyze(
        req.expected_behavior, req.actual_behavior, req.flow_description
    )
    return response.model_dump(mode="json")


@app.get("/api/diagnostics")
async def get_diagnostics():
    session = get_session()
    if session.diagnostics is None:
        return _error(404, "No diagnostics available. Run analysis first.")
    return session.diagnostics.model_dump(mode="json")


@app.post("/api/prompt-fixes")
async def session_prompt_fixes():
    """Generate prompt fixes for the session's agents from the latest diagnostics."""
    prompt_fixes = await get_session().generate_prompt_fixes()
    return {"promptFixes": prompt_fixes}


@app.get("/api/report")
async def get_report():
    session = get_session()
    if session.diagnostics is None:
        return _error(404, "No diagnostics available. Run analysis first.")
    diagnostics = session.diagnostics
    return {
        "report": format_report(diagnostics),
        "health_band": health_band(diagnostics.overall_health_score),
        "status_counts": status_counts(diagnostics),
    }


@app.post("/api/generate-prompt-fixes")
async def generate_prompt_fixes_endpoint(request: Request):
    """Stateless prompt-fix synthesis from a caller-supplied agent list and diagnostics."""
    try:
        body = await request.json()
        agents = body.get("agents") if isinstance(body, dict) else None
        diagnostic_results = body.get("diagnosticResults") if isinstance(body, dict) else None

        if agents is None or diagnostic_results is None:
            return _error(400, "Missing agents or diagnostic results")

        if not isinstance(agents, list):
            return _error(400, "agents must be a list")
        if any(isinstance(agent, dict) and not agent.get("id") for agent in agents):
            return _error(400, "Every agent must have an id")
        store = AgentHierarchyStore.from_records(agents, require_parent_for_sub=False)
        diagnostics = normalize(diagnostic_results)

        prompt_fixes = generate_prompt_fixes(store.agents, diagnostics)
        return {"promptFixes": prompt_fixes}
    except (ValidationError, FormatError) as e:
        return _error(400, str(e))
    except Exception as e:
        logger.error("Error generating prompt fixes", error=str(e))
        return _error(500, "Failed to generate prompt fixes")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
