"""Gymnasium environments for Falling Tiles."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Default 10x20 board, as in the browser game
register(
    id="FallingTiles-10x20-v0",
    entry_point="falling_tiles.env.falling_tiles_env:FallingTilesEnv",
)

__all__ = ["FallingTiles-10x20-v0"]
