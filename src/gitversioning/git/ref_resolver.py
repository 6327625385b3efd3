"""Apply branch/tag overrides and CI environment detection to a git situation."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from gitversioning.errors import InvalidRefFormatError
from gitversioning.git.ref_store import TAG_REF_PREFIX
from gitversioning.git.situation import REF_PREFIX

if TYPE_CHECKING:
	from collections.abc import Callable, Mapping

	from gitversioning.git.situation import GitSituation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CIRef:
	"""Branch and/or tag reported by a CI environment."""

	branch: str | None = None
	tag: str | None = None


@dataclass(frozen=True)
class CIVendor:
	"""A CI system whose environment variables describe the checked out ref."""

	name: str
	marker: Callable[[Mapping[str, str]], bool]
	sha_variable: str
	ref_variables: tuple[str, ...]
	extract: Callable[[Mapping[str, str]], CIRef]


def _is_true(name: str) -> Callable[[Mapping[str, str]], bool]:
	return lambda environ: environ.get(name, "").lower() == "true"


def _is_set(name: str) -> Callable[[Mapping[str, str]], bool]:
	return lambda environ: bool(environ.get(name, "").strip())


def _github_ref(environ: Mapping[str, str]) -> CIRef:
	ref = environ.get("GITHUB_REF")
	if not ref:
		return CIRef()
	if ref.startswith(TAG_REF_PREFIX):
		return CIRef(tag=ref)
	return CIRef(branch=ref)


def _gitlab_ref(environ: Mapping[str, str]) -> CIRef:
	branch = environ.get("CI_COMMIT_BRANCH") or environ.get("CI_MERGE_REQUEST_SOURCE_BRANCH_NAME")
	if branch:
		return CIRef(branch=branch)
	return CIRef(tag=environ.get("CI_COMMIT_TAG") or None)


def _circle_ref(environ: Mapping[str, str]) -> CIRef:
	branch = environ.get("CIRCLE_BRANCH")
	if branch:
		return CIRef(branch=branch)
	return CIRef(tag=environ.get("CIRCLE_TAG") or None)


def _jenkins_ref(environ: Mapping[str, str]) -> CIRef:
	branch = environ.get("BRANCH_NAME")
	tag = environ.get("TAG_NAME")
	if branch:
		# Jenkins sets BRANCH_NAME to the tag name for tag builds
		if branch == tag:
			return CIRef(tag=tag)
		return CIRef(branch=branch)
	return CIRef(tag=tag or None)


CI_VENDORS: tuple[CIVendor, ...] = (
	CIVendor("GitHub Actions", _is_true("GITHUB_ACTIONS"), "GITHUB_SHA", ("GITHUB_REF",), _github_ref),
	CIVendor(
		"GitLab CI",
		_is_true("GITLAB_CI"),
		"CI_COMMIT_SHA",
		("CI_COMMIT_BRANCH", "CI_MERGE_REQUEST_SOURCE_BRANCH_NAME", "CI_COMMIT_TAG"),
		_gitlab_ref,
	),
	CIVendor("Circle CI", _is_true("CIRCLECI"), "CIRCLE_SHA1", ("CIRCLE_BRANCH", "CIRCLE_TAG"), _circle_ref),
	CIVendor("Jenkins", _is_set("JENKINS_HOME"), "GIT_COMMIT", ("BRANCH_NAME", "TAG_NAME"), _jenkins_ref),
)


def detect_ci_vendor(environ: Mapping[str, str]) -> CIVendor | None:
	"""Return the first CI vendor whose marker variable is present."""
	for vendor in CI_VENDORS:
		if vendor.marker(environ):
			return vendor
	return None


def detect_ci_ref(environ: Mapping[str, str], head_commit: str) -> tuple[CIVendor, CIRef] | None:
	"""
	Read the ref of ``head_commit`` from the CI environment.

	Args:
	    environ: Environment variables
	    head_commit: Resolved HEAD commit id

	Returns:
	    The vendor and its ref, or None when no vendor is detected or the
	    vendor's commit does not match ``head_commit``

	"""
	vendor = detect_ci_vendor(environ)
	if vendor is None:
		return None
	vendor_sha = environ.get(vendor.sha_variable)
	if vendor_sha and vendor_sha != head_commit:
		logger.debug(
			"Ignore %s environment, %s=%s does not match HEAD %s",
			vendor.name,
			vendor.sha_variable,
			vendor_sha,
			head_commit,
		)
		return None
	return vendor, vendor.extract(environ)


def _strip_or_none(value: str | None) -> str | None:
	if value is None or not value.strip():
		return None
	return value.strip()


def resolve_refs(
	situation: GitSituation,
	*,
	override_branch: str | None = None,
	override_tag: str | None = None,
	provided_ref: str | None = None,
	environ: Mapping[str, str] | None = None,
) -> None:
	"""
	Set the effective branch and tags of ``situation``.

	Precedence: explicit branch/tag override, then a provided full ref, then
	the CI environment (only when the repository is detached), then the
	repository state as is.

	Args:
	    situation: Situation to update in place
	    override_branch: Branch override, blank means none
	    override_tag: Tag override, blank means none
	    provided_ref: Full ref such as ``refs/heads/main`` or ``refs/tags/v1``
	    environ: Environment variables, defaults to ``os.environ``

	Raises:
	    InvalidRefFormatError: If a ref or override has an invalid prefix

	"""
	branch = _strip_or_none(override_branch)
	tag = _strip_or_none(override_tag)
	if branch is not None or tag is not None:
		logger.info("Using git situation from overrides, branch: %s, tag: %s", branch, tag)
		situation.set_branch(branch)
		situation.set_tags([tag] if tag is not None else [])
		return

	if provided_ref is not None:
		if not provided_ref.startswith(REF_PREFIX):
			msg = f"Invalid provided ref {provided_ref} - needs to start with {REF_PREFIX}"
			raise InvalidRefFormatError(msg)
		logger.info("Using git situation from provided ref: %s", provided_ref)
		if provided_ref.startswith(TAG_REF_PREFIX):
			situation.set_branch(None)
			situation.set_tags([provided_ref])
		else:
			situation.set_branch(provided_ref)
			situation.set_tags([])
		return

	if not situation.is_detached:
		return

	environ = os.environ if environ is None else environ
	detected = detect_ci_ref(environ, situation.rev)
	if detected is None:
		return
	vendor, ci_ref = detected
	logger.info("Gather git situation from %s environment variables: %s", vendor.name, ", ".join(vendor.ref_variables))
	for name in vendor.ref_variables:
		logger.debug("  %s: %s", name, environ.get(name))
	if ci_ref.branch is not None:
		situation.set_branch(ci_ref.branch)
	elif ci_ref.tag is not None:
		situation.add_tag(ci_ref.tag)
