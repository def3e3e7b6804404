"""API routes."""

from fastapi import APIRouter

from soundshare.api.v1 import auth, health, playlists, songs

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(songs.router, prefix="/songs", tags=["songs"])
router.include_router(playlists.router, prefix="/playlists", tags=["playlists"])
