from job_tracker.db.models import ApplicationStatus, JobApplication
from job_tracker.services.audit import FieldChange, JobApplicationSnapshot, diff_snapshots


def _application(**overrides) -> JobApplication:
    values = {
        "job_title": "Backend Engineer",
        "status": ApplicationStatus.APPLIED,
        "location": "Remote",
        "notes": None,
    }
    values.update(overrides)
    return JobApplication(**values)


def test_snapshot_records_status_name() -> None:
    snapshot = JobApplicationSnapshot.capture(_application(status=ApplicationStatus.INTERVIEWING))
    assert snapshot.status == "Interviewing"


def test_no_changes_produce_no_rows() -> None:
    before = JobApplicationSnapshot.capture(_application())
    after = JobApplicationSnapshot.capture(_application())
    assert diff_snapshots(before, after) == []


def test_each_changed_field_is_reported_once() -> None:
    before = JobApplicationSnapshot.capture(_application())
    after = JobApplicationSnapshot.capture(
        _application(status=ApplicationStatus.OFFER, notes="Great call")
    )
    assert diff_snapshots(before, after) == [
        FieldChange("Status", "Applied", "Offer"),
        FieldChange("Notes", None, "Great call"),
    ]
