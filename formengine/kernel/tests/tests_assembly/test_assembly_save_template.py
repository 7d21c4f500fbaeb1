"""
Form Assembly: Save Template Tests

Saving writes exactly one template item, {"Title": name, "fields": [...]},
to the template store. A blank name writes nothing. A storage failure
comes back as a failed OperationResult; nothing raises.
"""

import pytest

from formengine.kernel.assembly import FormAssembly, MemoryStorage
from formengine.kernel.builder import SchemaBuilder
from formengine.kernel.types import HostCallbacks


class FailingStorage(MemoryStorage):
    async def create(self, data):
        raise ConnectionError("list unavailable")


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def region_builder():
    builder = SchemaBuilder()
    f = builder.add_field("choice")
    builder.update_field(f.id, "name", "Region")
    builder.update_field(f.id, "options", "North,South")
    return builder


class TestSaveTemplate:
    @pytest.mark.asyncio
    async def test_save_one_choice_field(self, storage, region_builder):
        """Save a one-field design as "Intake"."""
        assembly = FormAssembly(storage)

        result = await assembly.save_template(region_builder.fields, "Intake")

        assert result.ok
        assert result.error is None
        assert storage.created == [
            {"Title": "Intake", "fields": [{"name": "Region", "type": "choice", "options": ["North", "South"]}]}
        ]
        assert result.value["Id"] == 1

    @pytest.mark.asyncio
    async def test_options_set_as_list(self, storage):
        builder = SchemaBuilder()
        f = builder.add_field("choice")
        builder.update_field(f.id, "name", "Region")
        builder.update_field(f.id, "options", ["North", "South"])

        await FormAssembly(storage).save_template(builder.fields, "Intake")

        assert storage.created[0]["fields"] == [{"name": "Region", "type": "choice", "options": ["North", "South"]}]

    @pytest.mark.asyncio
    async def test_save_empty_schema(self, storage):
        result = await FormAssembly(storage).save_template([], "Blank")

        assert result.ok
        assert storage.created == [{"Title": "Blank", "fields": []}]

    @pytest.mark.asyncio
    async def test_saves_to_template_store(self, region_builder):
        records = MemoryStorage()
        templates = MemoryStorage()

        await FormAssembly(records, templates).save_template(region_builder.fields, "Intake")

        assert records.created == []
        assert len(templates.created) == 1

    @pytest.mark.asyncio
    async def test_builder_unchanged_after_save(self, storage, region_builder):
        before = region_builder.fields

        await FormAssembly(storage).save_template(region_builder.fields, "Intake")

        assert region_builder.fields == before


class TestSaveCancelled:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", [None, "", "   "])
    async def test_blank_name_writes_nothing(self, storage, region_builder, name):
        saved = []
        assembly = FormAssembly(storage, callbacks=HostCallbacks(on_save=lambda: saved.append(True)))

        result = await assembly.save_template(region_builder.fields, name)

        assert not result.ok
        assert result.error == "cancelled"
        assert storage.created == []
        assert saved == []


class TestSaveFailure:
    @pytest.mark.asyncio
    async def test_storage_failure_reported(self, region_builder):
        saved = []
        assembly = FormAssembly(FailingStorage(), callbacks=HostCallbacks(on_save=lambda: saved.append(True)))

        result = await assembly.save_template(region_builder.fields, "Intake")

        assert not result.ok
        assert "Failed to save template 'Intake'" in result.error
        assert "list unavailable" in result.error
        assert saved == []

    @pytest.mark.asyncio
    async def test_design_survives_failure(self, region_builder):
        before = region_builder.fields

        await FormAssembly(FailingStorage()).save_template(region_builder.fields, "Intake")

        assert region_builder.fields == before
