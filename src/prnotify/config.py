"""Notifier configuration for prnotify."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from prnotify.exceptions import NotifyConfigError

#: Label a forge puts on a pull request once it has been pushed.
DEFAULT_INTEGRATED_LABEL = "integrated"

#: File name of the notification history inside the ``notify`` scratch folder.
DEFAULT_HISTORY_NAME = "history"


@dataclasses.dataclass(frozen=True)
class NotifyConfig:
    """Notifier configuration.

    Parameters
    ----------
    integrator_id : str
        User id of the trusted integration bot. Only its
        ``Pushed as commit ...`` comments are believed.
    integrated_label : str
        Label marking a pull request as integrated.
    history_name : str
        File name of the persisted notification history.
    scratch_path : Path
        Directory under which work items keep their state.
    """

    integrator_id: str
    integrated_label: str = DEFAULT_INTEGRATED_LABEL
    history_name: str = DEFAULT_HISTORY_NAME
    scratch_path: Path = Path(".notify-scratch")

    def __post_init__(self) -> None:
        if not self.integrator_id.strip():
            raise NotifyConfigError("integrator_id must be non-empty")
        if not self.integrated_label.strip():
            raise NotifyConfigError("integrated_label must be non-empty")
        if not self.history_name.strip():
            raise NotifyConfigError("history_name must be non-empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> NotifyConfig:
        """Create configuration from ``PRNOTIFY_*`` environment variables.

        Explicit keyword arguments take precedence over environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "PRNOTIFY_INTEGRATOR_ID": "integrator_id",
            "PRNOTIFY_INTEGRATED_LABEL": "integrated_label",
            "PRNOTIFY_HISTORY_NAME": "history_name",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        scratch_env = env.get("PRNOTIFY_SCRATCH_PATH")
        if scratch_env is not None:
            config_kwargs["scratch_path"] = Path(scratch_env).expanduser()

        config_kwargs.update(overrides)
        if "scratch_path" in config_kwargs:
            config_kwargs["scratch_path"] = Path(config_kwargs["scratch_path"])

        if "integrator_id" not in config_kwargs:
            raise NotifyConfigError("PRNOTIFY_INTEGRATOR_ID is not set")

        return cls(**config_kwargs)
