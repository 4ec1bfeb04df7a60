"""Finds test libraries that leak into production configurations."""

from __future__ import annotations

from typing import NamedTuple

from .models import DependencyTree, ScopeValidationResult
from .tree_analysis import all_nodes

_RECOMMENDATION = "Move to testImplementation or testRuntimeOnly"


class _TestLibrary(NamedTuple):
    group: str
    artifact: str | None
    name: str


_TEST_LIBRARIES: tuple[_TestLibrary, ...] = (
    _TestLibrary("junit", "junit", "JUnit 4"),
    _TestLibrary("org.junit.jupiter", None, "JUnit 5"),
    _TestLibrary("org.junit.vintage", None, "JUnit 5 Vintage"),
    _TestLibrary("org.junit.platform", None, "JUnit Platform"),
    _TestLibrary("org.testng", "testng", "TestNG"),
    _TestLibrary("org.springframework", "spring-test", "Spring Test"),
    _TestLibrary("org.springframework.boot", "spring-boot-test", "Spring Boot Test"),
    _TestLibrary("org.springframework.boot", "spring-boot-starter-test", "Spring Boot Starter Test"),
    _TestLibrary("org.mockito", None, "Mockito"),
    _TestLibrary("io.mockk", "mockk", "MockK"),
    _TestLibrary("io.mockk", "mockk-jvm", "MockK"),
    _TestLibrary("org.assertj", "assertj-core", "AssertJ"),
    _TestLibrary("org.hamcrest", "hamcrest", "Hamcrest"),
    _TestLibrary("org.hamcrest", "hamcrest-core", "Hamcrest"),
    _TestLibrary("org.easymock", "easymock", "EasyMock"),
    _TestLibrary("org.powermock", None, "PowerMock"),
    _TestLibrary("com.github.tomakehurst", "wiremock", "WireMock"),
    _TestLibrary("org.wiremock", "wiremock", "WireMock"),
    _TestLibrary("org.jboss.arquillian", None, "Arquillian"),
    _TestLibrary("io.rest-assured", None, "REST Assured"),
    _TestLibrary("org.awaitility", "awaitility", "Awaitility"),
    _TestLibrary("org.testcontainers", None, "Testcontainers"),
    _TestLibrary("io.cucumber", None, "Cucumber"),
    _TestLibrary("org.spockframework", None, "Spock"),
    _TestLibrary("org.jmockit", "jmockit", "JMockit"),
    _TestLibrary("com.google.truth", "truth", "Google Truth"),
    _TestLibrary("net.javacrumbs.json-unit", None, "JsonUnit"),
    _TestLibrary("org.xmlunit", None, "XMLUnit"),
    _TestLibrary("org.dbunit", "dbunit", "DbUnit"),
    _TestLibrary("com.codeborne", "selenide", "Selenide"),
    _TestLibrary("org.seleniumhq.selenium", None, "Selenium"),
    _TestLibrary("org.robolectric", None, "Robolectric"),
    _TestLibrary("com.tngtech.archunit", None, "ArchUnit"),
    _TestLibrary("org.pitest", None, "Pitest"),
)


def match_test_library(group: str, artifact: str) -> str | None:
    """Return the name of the test library this coordinate belongs to, or None."""
    for lib in _TEST_LIBRARIES:
        if lib.artifact is not None:
            if group == lib.group and artifact == lib.artifact:
                return lib.name
        elif group == lib.group or group.startswith(f"{lib.group}."):
            return lib.name
    return None


def validate(tree: DependencyTree) -> list[ScopeValidationResult]:
    """Report test libraries found in a production configuration, sorted by coordinate."""
    if not tree.configuration.is_production():
        return []

    results: list[ScopeValidationResult] = []
    seen: set[str] = set()
    for node in all_nodes(tree):
        coord = node.coordinate()
        if coord in seen:
            continue
        library = match_test_library(node.group, node.artifact)
        if library is None:
            continue
        seen.add(coord)
        version = node.resolved_version if node.resolved_version is not None else node.requested_version
        results.append(
            ScopeValidationResult(
                coordinate=coord,
                version=version,
                matched_library=library,
                configuration=tree.configuration,
                recommendation=_RECOMMENDATION,
            )
        )

    results.sort(key=lambda result: result.coordinate)
    return results