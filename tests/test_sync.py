import pytest

from orghub_pwa.models.enums import ArtifactKind, ChangeAction
from orghub_pwa.normalization.normalizer import ClubNormalizer
from orghub_pwa.sync.executor import SyncError, apply_plan, sync_clubs
from orghub_pwa.sync.planner import find_orphans, plan_sync


def clubs_for(*ids):
    return ClubNormalizer().normalize([{"clubId": i, "name": i.upper()} for i in ids])


def test_plan_targets_every_club_plus_index():
    plan = plan_sync(clubs_for("a", "b"), [], [])

    assert [(w.kind, w.filename) for w in plan.writes] == [
        (ArtifactKind.MANIFEST, "manifest-a.json"),
        (ArtifactKind.INSTALLER, "a.html"),
        (ArtifactKind.MANIFEST, "manifest-b.json"),
        (ArtifactKind.INSTALLER, "b.html"),
        (ArtifactKind.INDEX, "index.html"),
    ]
    assert plan.deletes == []
    assert plan.club_count == 2


def test_orphans_exclude_index_and_unmanaged_files():
    orphans = find_orphans(
        clubs_for("a"),
        ["manifest-a.json", "manifest-b.json", "manifest.json", "icons.png"],
        ["a.html", "b.html", "index.html", "README.md", "Old-Club.HTML"],
    )

    assert [(o.kind, o.filename) for o in orphans] == [
        (ArtifactKind.MANIFEST, "manifest-b.json"),
        (ArtifactKind.INSTALLER, "Old-Club.HTML"),
        (ArtifactKind.INSTALLER, "b.html"),
    ]


def test_first_sync_writes_everything(storage):
    report = sync_clubs(clubs_for("a", "b"), storage)

    assert storage.ready
    assert len(report.written) == 5
    assert report.deleted == []
    assert set(storage.files["manifests"]) == {"manifest-a.json", "manifest-b.json"}
    assert set(storage.files["install"]) == {"a.html", "b.html", "index.html"}


def test_second_sync_with_same_list_mutates_nothing(storage):
    sync_clubs(clubs_for("a", "b"), storage)
    before = storage.mutations

    report = sync_clubs(clubs_for("a", "b"), storage)

    assert storage.mutations == before
    assert report.written == []
    assert report.mutation_count == 0
    assert len(report.unchanged) == 5


def test_only_changed_artifacts_are_rewritten(storage):
    sync_clubs(clubs_for("a", "b"), storage)
    storage.writes.clear()

    clubs = ClubNormalizer().normalize(
        [{"clubId": "a", "name": "A"}, {"clubId": "b", "name": "Renamed"}]
    )
    sync_clubs(clubs, storage)

    assert ("manifests", "manifest-a.json") not in storage.writes
    assert ("manifests", "manifest-b.json") in storage.writes
    assert ("install", "b.html") in storage.writes
    assert ("install", "index.html") in storage.writes


def test_existing_file_with_same_name_but_stale_content_is_rewritten(storage):
    storage.seed("manifests", "manifest-a.json", "{}\n")

    sync_clubs(clubs_for("a"), storage)

    assert ("manifests", "manifest-a.json") in storage.writes
    assert '"id": "orghub-a"' in storage.files["manifests"]["manifest-a.json"]


def test_removed_club_is_cleaned_up_and_index_preserved(storage):
    sync_clubs(clubs_for("a", "b", "c"), storage)

    report = sync_clubs(clubs_for("a", "c"), storage)

    assert set(storage.files["manifests"]) == {"manifest-a.json", "manifest-c.json"}
    assert set(storage.files["install"]) == {"a.html", "c.html", "index.html"}
    assert report.deleted == ["manifests/manifest-b.json", "install/b.html"]
    assert "/install/b.html" not in storage.files["install"]["index.html"]


def test_empty_club_list_removes_all_generated_files_but_not_index(storage):
    sync_clubs(clubs_for("a"), storage)
    storage.seed("install", "notes.txt", "keep me")

    sync_clubs([], storage)

    assert storage.files["manifests"] == {}
    assert set(storage.files["install"]) == {"index.html", "notes.txt"}


def test_dropped_records_never_produce_artifacts(storage):
    clubs = ClubNormalizer().normalize([{"clubId": "?!"}, {"clubId": "ok"}])

    sync_clubs(clubs, storage)

    assert set(storage.files["manifests"]) == {"manifest-ok.json"}
    assert set(storage.files["install"]) == {"ok.html", "index.html"}
    assert storage.files["install"]["index.html"].count("<li>") == 1


def test_failures_are_collected_and_the_pass_continues(storage):
    storage.seed("manifests", "manifest-gone.json")
    storage.fail_on = {"manifest-gone.json", "a.html"}

    with pytest.raises(SyncError) as excinfo:
        sync_clubs(clubs_for("a", "b"), storage)

    failures = excinfo.value.report.failures
    assert [(f.action, f.filename) for f in failures] == [
        (ChangeAction.DELETE, "manifest-gone.json"),
        (ChangeAction.WRITE, "a.html"),
    ]
    # Everything else still landed, the index included.
    assert "manifest-a.json" in storage.files["manifests"]
    assert "b.html" in storage.files["install"]
    assert "index.html" in storage.files["install"]


def test_dry_run_reports_without_mutating(storage):
    storage.seed("manifests", "manifest-old.json")

    report = sync_clubs(clubs_for("a"), storage, dry_run=True)

    assert storage.mutations == 0
    assert not storage.ready
    assert report.dry_run
    assert report.deleted == ["manifests/manifest-old.json"]
    assert len(report.written) == 3


def test_apply_plan_deletes_before_writing(storage):
    storage.seed("install", "b.html")
    calls = []
    original_write, original_delete = storage.write, storage.delete
    storage.write = lambda *a: (calls.append("write"), original_write(*a))
    storage.delete = lambda *a: (calls.append("delete"), original_delete(*a))

    apply_plan(plan_sync(clubs_for("a"), [], storage.list(ArtifactKind.INSTALLER)), storage)

    assert calls[0] == "delete"
    assert "delete" not in calls[1:]


def test_failed_index_write_is_reported(storage):
    storage.fail_on = {"index.html"}

    with pytest.raises(SyncError) as excinfo:
        sync_clubs([], storage)

    assert excinfo.value.report.failures[0].filename == "index.html"
    assert "index.html" in str(excinfo.value)


def test_index_in_other_case_is_never_an_orphan():
    orphans = find_orphans(clubs_for("a"), [], ["INDEX.html", "a.html", "old.html"])

    assert [o.filename for o in orphans] == ["old.html"]
