"""Demos module - Watch or benchmark the engine"""
from .engine_demo import run_games

__all__ = ['run_games']
