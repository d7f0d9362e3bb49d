"""Architecture guard tests."""

from tools.check_import_boundaries import check_import_boundaries


def test_import_boundaries_guard():
    violations = check_import_boundaries("travel_companion")
    assert violations == [], "Import boundary violations:\n" + "\n".join(violations)


def test_guard_reports_domain_importing_persistence(tmp_path):
    domain = tmp_path / "travel_companion" / "domain"
    domain.mkdir(parents=True)
    (domain / "__init__.py").write_text("", encoding="utf-8")
    (domain / "leaky.py").write_text(
        "from travel_companion.persistence.sqlite_repository import SQLiteTripRepository\n",
        encoding="utf-8",
    )

    violations = check_import_boundaries(tmp_path / "travel_companion")

    assert len(violations) == 1
    assert "travel_companion.domain.leaky -> travel_companion.persistence.sqlite_repository" in violations[0]


def test_guard_limits_dnd_to_application_contracts(tmp_path):
    dnd = tmp_path / "travel_companion" / "dnd"
    dnd.mkdir(parents=True)
    (dnd / "ok.py").write_text("from travel_companion.application.contracts import MoveCommand\n", encoding="utf-8")
    (dnd / "bad.py").write_text("from travel_companion.application import trip_service\n", encoding="utf-8")

    violations = check_import_boundaries(tmp_path / "travel_companion")

    assert len(violations) == 1
    assert "travel_companion.dnd.bad -> travel_companion.application.trip_service" in violations[0]
