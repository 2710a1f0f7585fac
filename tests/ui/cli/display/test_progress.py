"""Tests for the progress display wrapper."""

from pathlib import Path

from pytest_mock import MockerFixture

from albumsync.application.services import ReconcileRequest
from albumsync.features.reconcile import OperationReport
from albumsync.ui.cli.display import ProgressDisplay


def test_run_with_service_drives_progress_callback(tmp_path: Path, mocker: MockerFixture) -> None:
    request = ReconcileRequest(directory=tmp_path)
    report = OperationReport(operation="update", directory=tmp_path)
    seen: list[tuple[int, int]] = []

    def _run(operation: str, req: ReconcileRequest, progress) -> OperationReport:  # pyright: ignore[reportMissingParameterType, reportUnknownParameterType]
        assert operation == "update"
        assert req is request
        for index in range(1, 4):
            progress(index, 3, tmp_path / f"{index}.mp3")
            seen.append((index, 3))
        return report

    service = mocker.Mock()
    service.run.side_effect = _run

    result = ProgressDisplay().run_with_service(service, "update", request)

    assert result is report
    assert seen == [(1, 3), (2, 3), (3, 3)]
