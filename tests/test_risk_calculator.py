import pytest

from gradle_depcheck.errors import ExecutionFailedError
from gradle_depcheck.models import (
    DependencyConflict,
    DependencyNode,
    DependencyTree,
    GradleConfiguration,
    RiskLevel,
)
from gradle_depcheck.risk_calculator import (
    SemVer,
    assess_conflicts,
    parse_semver,
    strip_qualifiers,
)


class FakeRunner:
    def __init__(self, insight=None, fail=False):
        self.insight = insight or {}
        self.fail = fail
        self.calls = []

    def run_dependency_insight(self, project_path, coordinate, configuration):
        self.calls.append((project_path, coordinate, configuration))
        if self.fail:
            raise ExecutionFailedError(1, "insight failed")
        return self.insight.get(coordinate, "")


def conflict(coordinate, requested, resolved, requested_by="root"):
    return DependencyConflict(coordinate, requested, resolved, requested_by)


def single_tree(config, c, roots=None):
    if roots is None:
        roots = [DependencyNode("com.example", "app", "1.0.0")]
    return DependencyTree("test-project", config, roots, [c])


def assess_one(requested, resolved, config=GradleConfiguration.COMPILE_CLASSPATH, runner=None):
    tree = single_tree(config, conflict("org.example:lib", requested, resolved))
    return assess_conflicts(tree, runner or FakeRunner(), "/tmp/test")


def test_major_version_jump_is_high():
    assessed = assess_one("1.0.0", "2.0.0")
    assert len(assessed) == 1
    assert assessed[0].risk_level is RiskLevel.HIGH
    assert "Major version jump" in assessed[0].risk_reason


def test_minor_version_jump_is_medium():
    assessed = assess_one("1.0.0", "1.5.0")
    assert assessed[0].risk_level is RiskLevel.MEDIUM
    assert "Minor version jump" in assessed[0].risk_reason


def test_patch_version_bump_is_low():
    assessed = assess_one("1.0.0", "1.0.5")
    assert assessed[0].risk_level is RiskLevel.LOW
    assert "Patch version bump" in assessed[0].risk_reason


def test_qualifier_only_is_info():
    assessed = assess_one("1.0.0.Final", "1.0.0.RELEASE")
    assert assessed[0].risk_level is RiskLevel.INFO
    assert "Qualifier change only" in assessed[0].risk_reason


@pytest.mark.parametrize(
    "insight",
    [
        'org.example:lib:2.0.0 (selected by rule)\n   variant "compile" ...',
        'org.example:lib:2.0.0 (by constraint)\n   variant "compile" ...',
    ],
)
def test_bom_managed_reduces_risk(insight):
    runner = FakeRunner({"org.example:lib": insight})
    assessed = assess_one("1.0.0", "2.0.0", runner=runner)
    assert assessed[0].risk_level is RiskLevel.MEDIUM
    assert "BOM-managed" in assessed[0].risk_reason


def test_bom_marker_only_counts_on_first_line():
    runner = FakeRunner({"org.example:lib": "org.example:lib:2.0.0\n(by constraint)"})
    assessed = assess_one("1.0.0", "2.0.0", runner=runner)
    assert assessed[0].risk_level is RiskLevel.HIGH
    assert "BOM-managed" not in assessed[0].risk_reason


def test_bom_managed_falls_back_to_tree_on_runner_failure():
    constraint = DependencyNode("org.example", "lib", "2.0.0", is_constraint=True)
    root = DependencyNode("com.example", "app", "1.0.0", children=[constraint])
    tree = single_tree(
        GradleConfiguration.COMPILE_CLASSPATH,
        conflict("org.example:lib", "1.0.0", "2.0.0"),
        [root],
    )
    assessed = assess_conflicts(tree, FakeRunner(fail=True), "/tmp/test")
    assert assessed[0].risk_level is RiskLevel.MEDIUM
    assert "BOM-managed" in assessed[0].risk_reason


def test_runner_failure_without_constraint_keeps_risk():
    assessed = assess_one("1.0.0", "2.0.0", runner=FakeRunner(fail=True))
    assert assessed[0].risk_level is RiskLevel.HIGH


def test_downgrade_increases_risk():
    assessed = assess_one("2.0.0", "1.0.0")
    assert assessed[0].risk_level is RiskLevel.CRITICAL
    assert "downgrade detected" in assessed[0].risk_reason


def test_test_scope_reduces_risk():
    assessed = assess_one("1.0.0", "2.0.0", config=GradleConfiguration.TEST_COMPILE_CLASSPATH)
    assert assessed[0].risk_level is RiskLevel.MEDIUM
    assert "test scope" in assessed[0].risk_reason


def test_combined_adjustments():
    runner = FakeRunner(
        {"org.example:lib": 'org.example:lib:2.0.0 (selected by rule)\n   variant "compile" ...'}
    )
    assessed = assess_one(
        "1.0.0", "2.0.0", config=GradleConfiguration.TEST_COMPILE_CLASSPATH, runner=runner
    )
    assert assessed[0].risk_level is RiskLevel.LOW
    assert "BOM-managed" in assessed[0].risk_reason
    assert "test scope" in assessed[0].risk_reason


def test_non_semver_handled_gracefully():
    assessed = assess_one("RELEASE", "SNAPSHOT")
    assert assessed[0].risk_level is RiskLevel.MEDIUM
    assert "Unparseable" in assessed[0].risk_reason


def test_multi_segment_patch():
    assessed = assess_one("1.9.22.1", "1.9.25.1")
    assert assessed[0].risk_level is RiskLevel.LOW
    assert "Patch version bump" in assessed[0].risk_reason


def test_real_spring_boot_conflicts():
    conflicts = [
        conflict("org.slf4j:slf4j-api", "1.7.36", "2.0.17", "ch.qos.logback:logback-classic"),
        conflict(
            "com.fasterxml.jackson.core:jackson-databind",
            "2.13.0",
            "2.15.2",
            "org.springframework.boot:spring-boot-starter-web",
        ),
        conflict(
            "org.yaml:snakeyaml", "1.33.0", "1.33.5", "org.springframework.boot:spring-boot-starter"
        ),
    ]
    root = DependencyNode(
        "com.example",
        "my-app",
        "1.0.0",
        children=[
            DependencyNode("org.slf4j", "slf4j-api", "1.7.36"),
            DependencyNode("com.fasterxml.jackson.core", "jackson-databind", "2.13.0"),
            DependencyNode("org.yaml", "snakeyaml", "1.33.0"),
        ],
    )
    tree = DependencyTree(
        "spring-boot-app", GradleConfiguration.COMPILE_CLASSPATH, [root], conflicts
    )
    runner = FakeRunner(
        {
            "com.fasterxml.jackson.core:jackson-databind": (
                "com.fasterxml.jackson.core:jackson-databind:2.15.2 (selected by rule)\n"
                '   variant "compile" ...'
            )
        }
    )

    assessed = assess_conflicts(tree, runner, "/tmp/test")
    assert len(assessed) == 3
    assert assessed[0].risk_level is RiskLevel.HIGH
    assert "Major version jump (1.x -> 2.x)" in assessed[0].risk_reason
    assert assessed[1].risk_level is RiskLevel.LOW
    assert "Minor version jump" in assessed[1].risk_reason
    assert "BOM-managed" in assessed[1].risk_reason
    assert assessed[2].risk_level is RiskLevel.LOW
    assert "Patch version bump" in assessed[2].risk_reason


def test_original_conflicts_are_left_untouched():
    tree = single_tree(
        GradleConfiguration.COMPILE_CLASSPATH, conflict("org.example:lib", "1.0.0", "2.0.0")
    )
    assessed = assess_conflicts(tree, FakeRunner(), "/tmp/test")
    assert tree.conflicts[0].risk_level is None
    assert assessed[0].coordinate == tree.conflicts[0].coordinate
    assert assessed[0].requested_by == "root"


def test_insight_runs_once_per_unique_coordinate():
    c = conflict("org.example:lib", "1.0.0", "2.0.0")
    tree = DependencyTree("p", GradleConfiguration.COMPILE_CLASSPATH, [], [c, c])
    runner = FakeRunner()
    assessed = assess_conflicts(tree, runner, "/tmp/test")
    assert len(assessed) == 2
    assert runner.calls == [("/tmp/test", "org.example:lib", GradleConfiguration.COMPILE_CLASSPATH)]


@pytest.mark.parametrize(
    "version, expected",
    [
        ("3.4.3.Final", "3.4.3"),
        ("31.1-jre", "31.1"),
        ("1.0-SNAPSHOT", "1.0"),
        ("2.0.0-beta1", "2.0.0"),
        ("1.7.36", "1.7.36"),
    ],
)
def test_strip_qualifiers(version, expected):
    assert strip_qualifiers(version) == expected


@pytest.mark.parametrize(
    "version, expected",
    [
        ("1.7.36", SemVer(1, 7, 36)),
        ("3.4.3.Final", SemVer(3, 4, 3)),
        ("1.9.22.1", SemVer(1, 9, 22)),
        ("31.1-jre", SemVer(31, 1, 0)),
    ],
)
def test_parse_semver(version, expected):
    assert parse_semver(version) == expected


@pytest.mark.parametrize("version", ["RELEASE", "SNAPSHOT", "", "-1.0"])
def test_parse_semver_rejects_non_numeric(version):
    assert parse_semver(version) is None