# src/todoboard/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from .ports import TaskRepo


@dataclass
class AppState:
    # Settings-like object (config.Settings or a SimpleNamespace in tests).
    settings: object
    task_store: TaskRepo
