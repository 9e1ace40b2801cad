"""Shared fixtures for pyfree tests."""

import logging

import pytest

from pyfree.models import ReportModel

GiB = 1024**3


class FakeReader:
    """CounterReader stand-in returning fixed counters."""

    def __init__(self, model: ReportModel | None = None) -> None:
        self.model = model if model is not None else make_model()
        self.calls: list[bool] = []

    def collect(self, decimal: bool) -> ReportModel:
        self.calls.append(decimal)
        return ReportModel(
            total_ram=self.model.total_ram,
            free_ram=self.model.free_ram,
            buffer=self.model.buffer,
            shared=self.model.shared,
            total_swap=self.model.total_swap,
            used_swap=self.model.used_swap,
        )


def make_model(**overrides) -> ReportModel:
    fields = dict(
        total_ram=16 * GiB,
        free_ram=6 * GiB,
        buffer=4 * GiB,
        shared=33554432,
        total_swap=2 * GiB,
        used_swap=GiB // 2,
    )
    fields.update(overrides)
    return ReportModel(**fields)


@pytest.fixture
def fake_reader() -> FakeReader:
    return FakeReader()


@pytest.fixture(autouse=True)
def reset_pyfree_logger():
    """Drop handlers bound to a previous test's captured stderr."""
    logger = logging.getLogger("pyfree")
    logger.handlers.clear()
    yield
    logger.handlers.clear()
