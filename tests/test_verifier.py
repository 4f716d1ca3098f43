from __future__ import annotations

import pytest

from journalverify.errors import (
    CheckoutFailed,
    LocalFileNotPresent,
    LocalTagNotPresent,
    RemoteFileNotPresent,
)
from journalverify.model import FileRequirement, JournalRequirement, RegexMessage, TagRequirement
from journalverify.source import clone_repository
from journalverify.verifier import Mode, matches, verify, verify_local, verify_remote

from conftest import commit_files, requires_git

WEEK1 = "# Week 1\n\nToday I learned about loops.\n\n## Reflection\nGood week.\n"
WEEK2 = "# Week 2\n\nFunctions.\n\n## Reflection\nHard week.\n"


def requirement(*tags: TagRequirement) -> JournalRequirement:
    return JournalRequirement(tag_requirements=tags)


def file_req(path: str, *pairs: tuple[str, str]) -> FileRequirement:
    return FileRequirement(path, tuple(RegexMessage(r, m) for r, m in pairs))


REQ = requirement(
    TagRequirement("week1", (file_req("week1.md", (r"^# Week 1", "week 1 heading"), ("Reflection", "reflection")),)),
    TagRequirement("week2", (file_req("week2.md", (r"^# Week 2", "week 2 heading"), ("Reflection", "reflection")),)),
)


@pytest.fixture
def journal(make_repo):
    return make_repo(
        "Journals",
        [
            ("week1", {"week1.md": WEEK1}),
            ("week2", {"week2.md": WEEK2}),
        ],
    )


def test_matches_searches_anywhere():
    assert matches("abc\n# Week 1", "# Week")
    assert not matches("abc", "^b")
    assert matches("abc", "b")


# ----------------------------------------------------------------------
# Local
# ----------------------------------------------------------------------

@requires_git
def test_local_all_satisfied(journal):
    report = verify_local(REQ, journal, timeout=30)

    assert report.success
    assert report.mode is Mode.LOCAL
    assert report.tags_checked == ["week1", "week2"]


@requires_git
def test_local_mismatches_accumulate_without_early_exit(journal, capsys):
    req = requirement(
        TagRequirement("week1", (file_req("week1.md", ("NOPE-1", "first missing"), ("Reflection", "ok"), ("NOPE-2", "second missing")),)),
        TagRequirement("week2", (file_req("week2.md", ("NOPE-3", "third missing")),)),
    )

    report = verify_local(req, journal, timeout=30)

    assert not report.success
    assert [v.message for v in report.violations] == ["first missing", "second missing", "third missing"]
    assert report.tags_checked == ["week1", "week2"]
    out = capsys.readouterr().out
    assert "Required text is not present: first missing in LOCAL file week1.md" in out
    assert "Required text is not present: second missing in LOCAL file week1.md" in out
    assert "Required text is not present: third missing in LOCAL file week2.md" in out


@requires_git
def test_local_missing_file_is_fatal(journal):
    req = requirement(
        TagRequirement("week1", (file_req("missing.md", ("x", "x")), file_req("week1.md", ("NOPE", "never checked")))),
    )

    with pytest.raises(LocalFileNotPresent) as exc:
        verify_local(req, journal, timeout=30)

    assert exc.value.file_pathname == "missing.md"
    assert str(exc.value) == "Required LOCAL file not present: missing.md"


@requires_git
def test_local_directory_is_not_a_file(journal):
    (journal / "notes").mkdir()

    with pytest.raises(LocalFileNotPresent):
        verify_local(requirement(TagRequirement("week1", (file_req("notes"),))), journal, timeout=30)


@requires_git
def test_local_content_is_checked_before_tag(journal, capsys):
    commit_files(journal, {"week3.md": "# Week 3\n"}, message="untagged work")
    req = requirement(
        TagRequirement("week3", (file_req("week3.md", ("Reflection", "week 3 reflection")),)),
    )

    with pytest.raises(LocalTagNotPresent) as exc:
        verify_local(req, journal, timeout=30)

    assert exc.value.tag_name == "week3"
    assert exc.value.error_message  # git's "unknown revision"
    assert "week 3 reflection in LOCAL file week3.md" in capsys.readouterr().out


@requires_git
def test_local_does_not_checkout(journal):
    verify_local(REQ, journal, timeout=30)

    # HEAD still on the branch tip: week2.md present
    assert (journal / "week2.md").exists()


# ----------------------------------------------------------------------
# Remote
# ----------------------------------------------------------------------

@pytest.fixture
def clone(journal, tmp_path):
    return clone_repository(str(journal), "Journals", work_dir=tmp_path / "work", timeout=30)


@requires_git
def test_remote_all_satisfied(clone):
    report = verify_remote(REQ, clone, timeout=30)

    assert report.success
    assert report.mode is Mode.REMOTE
    assert report.tags_checked == ["week1", "week2"]


@requires_git
def test_remote_checks_the_tagged_revision(clone):
    # week2.md exists on the default branch but not at tag week1
    req = requirement(TagRequirement("week1", (file_req("week2.md"),)))

    with pytest.raises(RemoteFileNotPresent) as exc:
        verify_remote(req, clone, timeout=30)

    assert str(exc.value) == "Required REMOTE file not present: week2.md"


@requires_git
def test_remote_checkout_failure_aborts(clone, capsys):
    req = requirement(
        TagRequirement("no-such-tag", (file_req("week1.md", ("NOPE", "never reported")),)),
        TagRequirement("week1", (file_req("week1.md", ("NOPE", "never reported")),)),
    )

    with pytest.raises(CheckoutFailed) as exc:
        verify_remote(req, clone, timeout=30)

    assert exc.value.tag_name == "no-such-tag"
    assert exc.value.error_message
    assert "never reported" not in capsys.readouterr().out


@requires_git
def test_remote_mismatches_are_labelled_remote(clone, capsys):
    req = requirement(TagRequirement("week2", (file_req("week2.md", ("Week 1", "wrong week")),)))

    report = verify(req, clone, Mode.REMOTE, timeout=30)

    assert not report.success
    assert report.violations[0].mode is Mode.REMOTE
    assert "wrong week in REMOTE file week2.md" in capsys.readouterr().out


def test_empty_requirement_trivially_succeeds(tmp_path):
    assert verify_remote(JournalRequirement(), tmp_path).success
    assert verify_local(JournalRequirement(), tmp_path).success
