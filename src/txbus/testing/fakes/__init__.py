"""Testing fakes – in-memory doubles for kernel ports."""
from txbus.testing.fakes.unit_of_work import RecordingUnitOfWork, RecordingUnitOfWorkFactory

__all__ = ["RecordingUnitOfWork", "RecordingUnitOfWorkFactory"]
