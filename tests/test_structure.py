"""Tests for structural validation of the parsed tree."""

from workflowlint.rules.structure import (
    check_events,
    check_jobs,
    check_jobs_section,
    check_permissions,
    check_schedule,
    validate_structure,
)

JOBS = "jobs:\n  build:\n    runs-on: ubuntu-latest\n    steps:\n      - run: make\n"


def rule_ids(findings):
    return [f.rule_id for f in findings]


class TestJobsSection:
    def test_missing_jobs_anchored_at_on(self, make_context):
        findings = check_jobs_section(make_context("name: x\non:\n  push:\n"))
        assert rule_ids(findings) == ["missing-jobs"]
        assert findings[0].line == 2
        assert findings[0].severity.value == "high"
        assert findings[0].category.value == "syntax"

    def test_missing_jobs_without_on_uses_line_one(self, make_context):
        findings = check_jobs_section(make_context("name: x\n"))
        assert findings[0].line == 1

    def test_jobs_not_a_mapping(self, make_context):
        assert rule_ids(check_jobs_section(make_context("jobs: [a, b]\n"))) == ["missing-jobs"]

    def test_empty_jobs_mapping_is_present(self, make_context):
        assert check_jobs_section(make_context("jobs: {}\n")) == []

    def test_scalar_document(self, make_context):
        assert rule_ids(validate_structure(make_context("hello"))) == ["missing-jobs"]


class TestEvents:
    def test_unknown_event(self, make_context):
        findings = check_events(make_context("on:\n  push:\n  pushh:\n" + JOBS))
        assert rule_ids(findings) == ["invalid-event"]
        assert findings[0].line == 3
        assert findings[0].params[0] == "pushh"
        assert "push" in findings[0].params[1]

    def test_skipped_when_schema_empty(self, make_context, empty_reference):
        context = make_context("on:\n  pushh:\n" + JOBS, empty_reference)
        assert check_events(context) == []

    def test_list_and_string_on_are_skipped(self, make_context):
        assert check_events(make_context("on: [pushh]\n" + JOBS)) == []
        assert check_events(make_context("on: pushh\n" + JOBS)) == []


class TestPermissions:
    def test_unknown_scope(self, make_context):
        findings = check_permissions(make_context("permissions:\n  content: read\n" + JOBS))
        assert rule_ids(findings) == ["invalid-permission"]
        assert findings[0].line == 2

    def test_invalid_level(self, make_context):
        text = "permissions:\n  issues: read\n  contents: admin\n" + JOBS
        findings = check_permissions(make_context(text))
        assert rule_ids(findings) == ["invalid-permission-level"]
        assert findings[0].severity.value == "medium"
        assert findings[0].line == 3
        assert findings[0].params == ("admin",)

    def test_valid_permissions(self, make_context):
        text = "permissions:\n  contents: read\n  id-token: write\n  issues: none\n" + JOBS
        assert check_permissions(make_context(text)) == []

    def test_write_all_string_is_not_structural(self, make_context):
        assert check_permissions(make_context("permissions: write-all\n" + JOBS)) == []

    def test_scope_check_skipped_without_schema(self, make_context, empty_reference):
        context = make_context("permissions:\n  anything: write\n" + JOBS, empty_reference)
        assert check_permissions(context) == []


class TestSchedule:
    def test_three_field_cron(self, make_context):
        text = 'on:\n  schedule:\n    - cron: "* * *"\n' + JOBS
        findings = check_schedule(make_context(text))
        assert rule_ids(findings) == ["invalid-cron"]
        assert findings[0].line == 3
        assert findings[0].params == ("* * *",)

    def test_five_field_cron(self, make_context):
        text = 'on:\n  schedule:\n    - cron: "0 0 * * 0"\n' + JOBS
        assert check_schedule(make_context(text)) == []

    def test_mistyped_schedule_is_skipped(self, make_context):
        assert check_schedule(make_context("on:\n  schedule: daily\n" + JOBS)) == []
        assert check_schedule(make_context("on:\n  schedule:\n    - daily\n" + JOBS)) == []


class TestJobs:
    def test_missing_runs_on_and_steps(self, make_context):
        findings = check_jobs(make_context("jobs:\n  build:\n    name: Build\n"))
        assert rule_ids(findings) == ["missing-runs-on", "missing-steps"]
        assert all(f.line == 2 for f in findings)
        assert findings[0].params == ("build",)

    def test_null_job_body(self, make_context):
        findings = check_jobs(make_context("jobs:\n  build:\n"))
        assert rule_ids(findings) == ["missing-runs-on", "missing-steps"]

    def test_empty_steps_list_is_present(self, make_context):
        text = "jobs:\n  build:\n    runs-on: [self-hosted]\n    steps: []\n"
        assert check_jobs(make_context(text)) == []

    def test_empty_runs_on_string(self, make_context):
        text = "jobs:\n  build:\n    runs-on: ''\n    steps:\n      - run: make\n"
        assert rule_ids(check_jobs(make_context(text))) == ["missing-runs-on"]

    def test_reusable_workflow_job_is_skipped(self, make_context):
        text = "jobs:\n  call:\n    uses: org/repo/.github/workflows/ci.yml@v1\n"
        assert check_jobs(make_context(text)) == []

    def test_complete_job(self, make_context):
        assert check_jobs(make_context(JOBS)) == []


class TestValidateStructure:
    def test_check_order(self, make_context):
        text = (
            "on:\n"
            "  pushh:\n"
            "  schedule:\n"
            "    - cron: '* *'\n"
            "permissions:\n"
            "  bogus: read\n"
            "jobs:\n"
            "  build:\n"
            "    runs-on: ubuntu-latest\n"
        )
        assert rule_ids(validate_structure(make_context(text))) == [
            "invalid-event",
            "invalid-permission",
            "invalid-cron",
            "missing-steps",
        ]
