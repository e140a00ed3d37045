"""Dashboard presenter - pod rows and panel label formatting."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from rich.markup import escape
from rich.text import Text

from kubedeck.constants.enums import Panel, PodStatus
from kubedeck.constants.values import TITLE_LOGS, TITLE_PODS, TITLE_RESOURCES
from kubedeck.models.core.pod_info import PodRecord
from kubedeck.utils.formatting import format_age

_PANEL_TITLES: dict[Panel, str] = {
    Panel.PODS: TITLE_PODS,
    Panel.RESOURCES: TITLE_RESOURCES,
    Panel.LOGS: TITLE_LOGS,
}

_STATUS_STYLES: dict[str, str] = {
    PodStatus.TERMINATING.value: "red",
    PodStatus.DELETED.value: "red",
}

_SELECTED_STYLE = "bold reverse"


class DashboardPresenter:
    """Formats dashboard data for the widgets."""

    def pod_row(
        self, pod: PodRecord, *, selected: bool = False, now: datetime | None = None
    ) -> tuple[Text, str, str]:
        """Row of the pods table: ``(name, status, age)``."""
        name = Text(pod.name, style=_SELECTED_STYLE if selected else "")
        return name, pod.status, format_age(pod.started_at, now)

    def pod_rows(
        self,
        pods: Sequence[PodRecord],
        selected_uid: str | None = None,
        now: datetime | None = None,
    ) -> list[tuple[str, tuple[Text, str, str]]]:
        """Rows keyed by pod uid, in mirror order."""
        return [
            (pod.uid, self.pod_row(pod, selected=pod.uid == selected_uid, now=now))
            for pod in pods
        ]

    def panel_label(
        self,
        panel: Panel,
        *,
        container: str | None = None,
        status: str | None = None,
        spinner: str | None = None,
    ) -> str:
        """Border label such as ``⠋ Logs [web] TERMINATING`` (Rich markup)."""
        return self.label(
            _PANEL_TITLES[panel],
            detail=container,
            status=status,
            spinner=spinner,
        )

    def pods_label(
        self,
        namespace: str | None,
        *,
        status: str | None = None,
        spinner: str | None = None,
    ) -> str:
        return self.label(TITLE_PODS, detail=namespace, status=status, spinner=spinner)

    def shell_label(
        self, title: str, *, status: str | None = None, spinner: str | None = None
    ) -> str:
        return self.label(title, status=status, spinner=spinner, bracketed=False)

    @staticmethod
    def label(
        title: str,
        *,
        detail: str | None = None,
        status: str | None = None,
        spinner: str | None = None,
        bracketed: bool = True,
    ) -> str:
        parts: list[str] = []
        if spinner:
            parts.append(spinner)
        parts.append(escape(title))
        if detail:
            parts.append(escape(f"[{detail}]") if bracketed else escape(detail))
        if status:
            style = _STATUS_STYLES.get(status, "red")
            parts.append(f"[{style}]{escape(status)}[/{style}]")
        return " ".join(parts)


__all__ = [
    "DashboardPresenter",
]
