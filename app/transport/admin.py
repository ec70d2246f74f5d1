from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/sessions")
async def list_sessions(request: Request):
    """
    List all active sessions (debug/admin).
    """
    registry = request.app.state.registry
    scheduler = request.app.state.scheduler
    wsman = request.app.state.wsman

    sessions = []
    for s in registry.list_sessions():
        sessions.append(
            {
                "session_id": s.id,
                "status": s.status,
                "round": s.round,
                "host_id": s.host_id,
                "drawer_id": s.drawer.id if s.drawer else None,
                "players": len(s.players),
                "connected": await wsman.group_size(s.id),
                "pending_timer": scheduler.pending(s.id),
            }
        )

    return {"sessions": sessions}


@router.post("/sessions/{session_id}/close")
async def close_session(session_id: str, request: Request):
    """
    Force close a session (debug/admin). Cancels its timers and closes websockets.
    """
    registry = request.app.state.registry
    wsman = request.app.state.wsman

    if session_id not in registry:
        raise HTTPException(status_code=404, detail="Session not found")

    async with registry.locked(session_id):
        registry.remove(session_id)
    await wsman.close_group(session_id, code=4000)

    return {"ok": True, "session_id": session_id}
