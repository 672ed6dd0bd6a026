"""End-to-end tests for Client.generate over real project trees."""

from __future__ import annotations

import io
import json
import os
import threading

import pytest

from edward import EDWARD_VERSION
from edward.client import Client
from edward.config.store import load_config
from edward.errors import DiscoveryBackendError, DuplicateNameError

PROMPT = (
    "The following will be generated:\n"
    "Services:\n"
    "\t{services}\n"
    "Do you wish to continue? [y/n]? "
)


def run(project, input_text="", force=False, group="", services=(), targets=()):
    """Run generate with string streams; return (output, config_path)."""
    out = io.StringIO()
    client = Client(working_dir=project, input=io.StringIO(input_text), output=out)
    client.generate(list(services), force, group, list(targets))
    return out.getvalue(), client.config_path


def config_names(path):
    config = load_config(path, EDWARD_VERSION)
    return sorted(config.service_map), config


# ──────────────────────────────────────────────────────────────────
# Project trees
# ──────────────────────────────────────────────────────────────────

@pytest.fixture
def single(project, go_service):
    go_service(project, "edward-test-service")
    return project


@pytest.fixture
def single_with_config(single, config_writer):
    config_writer(single / "edward.json", ["edward-test-service"])
    return single


@pytest.fixture
def group_with_config(project, go_service, config_writer):
    go_service(project, "edward-test-service")
    go_service(project, "edward-test-service2")
    config_writer(project / "edward.json", ["edward-test-service"], {"group1": ["edward-test-service"]})
    return project


@pytest.fixture
def duplicate_names(project, go_service):
    go_service(project, "first/edward-test-service")
    go_service(project, "second/edward-test-service")
    return project


class TestGenerate:
    def test_existing_config_and_services(self, single_with_config):
        before = (single_with_config / "edward.json").read_bytes()
        output, path = run(single_with_config)
        assert output == "No new services, groups or imports found\n"
        assert path.read_bytes() == before

    def test_existing_config_and_services_forced(self, single_with_config):
        output, path = run(single_with_config, force=True)
        assert output == "No new services, groups or imports found\n"
        assert config_names(path)[0] == ["edward-test-service"]

    def test_existing_empty_config_file(self, single):
        (single / "edward.json").write_text("", encoding="utf-8")
        output, path = run(single, input_text="Y\n")
        assert output == PROMPT.format(services="edward-test-service") + f"Wrote to: {single / 'edward.json'}\n"
        assert config_names(path)[0] == ["edward-test-service"]

    def test_new_config_and_service(self, single):
        output, path = run(single, input_text="Y\n")
        assert output == PROMPT.format(services="edward-test-service") + f"Wrote to: {path}\n"
        assert str(path) == os.path.join(str(single), "edward.json")
        names, config = config_names(path)
        assert names == ["edward-test-service"]
        assert config.version == EDWARD_VERSION
        assert config.service_map["edward-test-service"].path == "edward-test-service"

    def test_new_config_and_service_forced(self, single):
        output, path = run(single, force=True)
        assert output == f"Wrote to: {path}\n"
        assert config_names(path)[0] == ["edward-test-service"]

    def test_duplicates(self, duplicate_names):
        with pytest.raises(DuplicateNameError) as excinfo:
            run(duplicate_names, force=True)
        assert str(excinfo.value) == (
            "Multiple services or groups were found with the names: edward-test-service"
        )
        assert not (duplicate_names / "edward.json").exists()

    def test_duplicates_leave_config_untouched(self, duplicate_names, config_writer):
        config_writer(duplicate_names / "edward.json", [])
        before = (duplicate_names / "edward.json").read_bytes()
        with pytest.raises(DuplicateNameError):
            run(duplicate_names, force=True)
        assert (duplicate_names / "edward.json").read_bytes() == before

    def test_new_config_and_service_with_group(self, single):
        output, path = run(single, input_text="Y\n", group="newgroup")
        assert output == PROMPT.format(services="edward-test-service") + f"Wrote to: {path}\n"
        _, config = config_names(path)
        assert sorted(config.group_map) == ["newgroup"]
        assert config.group_map["newgroup"].children == ["edward-test-service"]

    def test_new_service_with_existing_group(self, group_with_config):
        output, path = run(group_with_config, input_text="Y\n", group="group1")
        assert output == PROMPT.format(services="edward-test-service2") + f"Wrote to: {path}\n"
        names, config = config_names(path)
        assert names == ["edward-test-service", "edward-test-service2"]
        assert config.group_map["group1"].children == ["edward-test-service", "edward-test-service2"]

    def test_declined(self, single):
        output, path = run(single, input_text="n\n")
        assert output == PROMPT.format(services="edward-test-service")
        assert not path.exists()

    def test_input_closed_without_answer(self, single):
        output, path = run(single, input_text="")
        assert "Wrote to" not in output
        assert not path.exists()

    def test_idempotent(self, single):
        run(single, force=True)
        before = (single / "edward.json").read_bytes()
        output, _ = run(single, input_text="Y\n")
        assert output == "No new services, groups or imports found\n"
        assert (single / "edward.json").read_bytes() == before

    def test_force_equivalence(self, tmp_path, go_service):
        results = []
        for force, answer in ((True, ""), (False, "y\n")):
            root = tmp_path / f"force-{force}"
            go_service(root, "svc-b")
            go_service(root, "svc-a")
            _, path = run(root, input_text=answer, force=force, group="all")
            results.append(json.loads(path.read_text(encoding="utf-8")))
        assert results[0] == results[1]
        assert [s["name"] for s in results[0]["services"]] == ["svc-a", "svc-b"]

    def test_explicit_service_names(self, group_with_config):
        (group_with_config / "edward.json").unlink()
        _, path = run(group_with_config, force=True, services=["edward-test-service2"])
        assert config_names(path)[0] == ["edward-test-service2"]

    def test_explicit_targets(self, project, go_service):
        go_service(project, "apps/svc-a")
        go_service(project, "other/svc-b")
        _, path = run(project, force=True, targets=["apps"])
        names, config = config_names(path)
        assert names == ["svc-a"]
        assert config.service_map["svc-a"].path == os.path.join("apps", "svc-a")

    def test_missing_target(self, project):
        with pytest.raises(DiscoveryBackendError):
            run(project, force=True, targets=["missing"])
        assert not (project / "edward.json").exists()

    def test_service_colliding_with_group(self, single, config_writer):
        config_writer(single / "edward.json", [], {"edward-test-service": []})
        with pytest.raises(DuplicateNameError, match="edward-test-service"):
            run(single, force=True)

    def test_all_conflicts_reported_together(self, project, go_service, config_writer):
        go_service(project, "a/svc-b")
        go_service(project, "b/svc-b")
        go_service(project, "shared")
        config_writer(project / "edward.json", [], {"shared": []})
        before = (project / "edward.json").read_bytes()
        with pytest.raises(DuplicateNameError) as excinfo:
            run(project, force=True)
        assert str(excinfo.value) == (
            "Multiple services or groups were found with the names: shared, svc-b"
        )
        assert (project / "edward.json").read_bytes() == before

    def test_conflicts_fatal_outside_requested_services(self, duplicate_names, go_service):
        go_service(duplicate_names, "wanted")
        with pytest.raises(DuplicateNameError, match="edward-test-service"):
            run(duplicate_names, force=True, services=["wanted"])
        assert not (duplicate_names / "edward.json").exists()


class TestGenerateOverPipes:
    """Drive generate the way a terminal-less harness does: one thread feeds
    input, one drains output, and the engine runs on the main thread."""

    def _drive(self, project, input_text, force):
        in_r, in_w = os.pipe()
        out_r, out_w = os.pipe()
        input_reader = os.fdopen(in_r, "r", encoding="utf-8")
        input_writer = os.fdopen(in_w, "w", encoding="utf-8")
        output_reader = os.fdopen(out_r, "r", encoding="utf-8")
        output_writer = os.fdopen(out_w, "w", encoding="utf-8")

        def feed():
            if input_text:
                input_writer.write(input_text)
                input_writer.flush()

        drained: list[str] = []

        def drain():
            drained.append(output_reader.read())

        feeder = threading.Thread(target=feed)
        drainer = threading.Thread(target=drain)
        feeder.start()
        drainer.start()

        client = Client(working_dir=project, input=input_reader, output=output_writer)
        try:
            client.generate([], force, "", [])
        finally:
            feeder.join()
            input_writer.close()
            output_writer.close()
            drainer.join()
            input_reader.close()
            output_reader.close()
        return drained[0], client.config_path

    def test_confirmed(self, single):
        output, path = self._drive(single, "Y\n", False)
        assert output == PROMPT.format(services="edward-test-service") + f"Wrote to: {path}\n"

    def test_no_op_never_reads_input(self, single_with_config):
        output, _ = self._drive(single_with_config, "Y\n", False)
        assert output == "No new services, groups or imports found\n"

    def test_forced_without_input(self, single):
        output, path = self._drive(single, "", True)
        assert output == f"Wrote to: {path}\n"
