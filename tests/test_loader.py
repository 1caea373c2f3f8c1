#!/usr/bin/env python3
"""Tests for YAML loading and saving utilities."""

import pytest
import yaml

from registry import (
    load_registry,
    save_registry,
    registry_to_dict,
    MaintenanceRegistry,
    MaintenanceType,
    RegistryFileError,
    Schedule,
)

# =============================================================================
# load_registry tests
# =============================================================================


class TestLoadRegistry:
    """Tests for load_registry function."""

    def test_loads_registry(self, tmp_path):
        """Load a registry with one schedule and one type."""
        yaml_content = """
lastTypeId: 1
schedules:
  - vehicleId: 1
    lastMaintenanceMileage: 10000
    maintenanceInterval: 5000
    nextMaintenanceMileage: 15000
    lastMaintenanceDate: 100
types:
  - id: 1
    name: Oil Change
    description: Regular oil change service
    recommendedInterval: 5000
"""
        yaml_file = tmp_path / "registry.yaml"
        yaml_file.write_text(yaml_content)

        registry = load_registry(yaml_file)

        assert isinstance(registry, MaintenanceRegistry)
        assert registry.get_maintenance_schedule(1) == Schedule(10000, 5000, 15000, 100)
        assert registry.get_maintenance_type(1) == MaintenanceType(
            "Oil Change", "Regular oil change service", 5000
        )
        assert registry.state.last_type_id == 1

    def test_string_vehicle_ids(self, tmp_path):
        yaml_file = tmp_path / "registry.yaml"
        yaml_file.write_text("""
schedules:
  - vehicleId: truck-7
    lastMaintenanceMileage: 0
    maintenanceInterval: 3000
    nextMaintenanceMileage: 3000
    lastMaintenanceDate: 5
""")
        registry = load_registry(yaml_file)
        assert registry.get_maintenance_schedule("truck-7").next_maintenance_mileage == 3000

    def test_empty_file_gives_empty_registry(self, tmp_path):
        yaml_file = tmp_path / "registry.yaml"
        yaml_file.write_text("")

        registry = load_registry(yaml_file)

        assert registry.list_schedules() == []
        assert registry.list_types() == []
        assert registry.state.last_type_id == 0

    def test_counter_defaults_to_highest_type_id(self, tmp_path):
        yaml_file = tmp_path / "registry.yaml"
        yaml_file.write_text("""
types:
  - id: 4
    name: Coolant
    recommendedInterval: 30000
""")
        registry = load_registry(yaml_file)
        assert registry.state.last_type_id == 4
        assert registry.get_maintenance_type(4).description == ""
        assert registry.add_maintenance_type("Belt", "", 60000) == 5

    def test_clock_passed_through(self, tmp_path):
        yaml_file = tmp_path / "registry.yaml"
        yaml_file.write_text("")
        registry = load_registry(yaml_file, clock=lambda: 321)
        registry.set_maintenance_schedule(1, 0, 10)
        assert registry.get_maintenance_schedule(1).last_maintenance_date == 321

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_registry(tmp_path / "nope.yaml")

    def test_top_level_list_rejected(self, tmp_path):
        yaml_file = tmp_path / "registry.yaml"
        yaml_file.write_text("- 1\n- 2\n")
        with pytest.raises(RegistryFileError):
            load_registry(yaml_file)

    def test_schedule_missing_field_rejected(self, tmp_path):
        yaml_file = tmp_path / "registry.yaml"
        yaml_file.write_text("""
schedules:
  - vehicleId: 1
    lastMaintenanceMileage: 10000
""")
        with pytest.raises(RegistryFileError, match="missing field"):
            load_registry(yaml_file)

    def test_malformed_type_entry_rejected(self, tmp_path):
        yaml_file = tmp_path / "registry.yaml"
        yaml_file.write_text("""
types:
  - name: Oil Change
""")
        with pytest.raises(RegistryFileError, match="malformed type entry"):
            load_registry(yaml_file)


# =============================================================================
# save_registry tests
# =============================================================================


class TestSaveRegistry:
    """Tests for save_registry and registry_to_dict."""

    @pytest.fixture
    def registry(self):
        registry = MaintenanceRegistry(clock=lambda: 100)
        registry.set_maintenance_schedule(1, 10000, 5000)
        registry.add_maintenance_type("Oil Change", "Regular oil change service", 5000)
        return registry

    def test_to_dict_uses_camel_case(self, registry):
        data = registry_to_dict(registry)
        assert data == {
            "lastTypeId": 1,
            "schedules": [
                {
                    "vehicleId": 1,
                    "lastMaintenanceMileage": 10000,
                    "maintenanceInterval": 5000,
                    "nextMaintenanceMileage": 15000,
                    "lastMaintenanceDate": 100,
                }
            ],
            "types": [
                {
                    "id": 1,
                    "name": "Oil Change",
                    "description": "Regular oil change service",
                    "recommendedInterval": 5000,
                }
            ],
        }

    def test_writes_yaml(self, registry, tmp_path):
        yaml_file = tmp_path / "registry.yaml"
        save_registry(yaml_file, registry)

        with open(yaml_file) as f:
            data = yaml.safe_load(f)
        assert data["lastTypeId"] == 1
        assert data["schedules"][0]["nextMaintenanceMileage"] == 15000
        assert data["types"][0]["name"] == "Oil Change"

    def test_reload_preserves_state(self, registry, tmp_path):
        yaml_file = tmp_path / "registry.yaml"
        registry.record_maintenance(1, 15000)
        save_registry(yaml_file, registry)

        reloaded = load_registry(yaml_file)
        assert reloaded.get_maintenance_schedule(1) == Schedule(15000, 5000, 20000, 100)
        assert reloaded.state.last_type_id == 1

    def test_numeric_string_vehicle_id_stays_string(self, tmp_path):
        registry = MaintenanceRegistry()
        registry.set_maintenance_schedule("42", 0, 1000)
        yaml_file = tmp_path / "registry.yaml"
        save_registry(yaml_file, registry)

        reloaded = load_registry(yaml_file)
        assert reloaded.get_maintenance_schedule("42") is not None
        assert reloaded.get_maintenance_schedule(42) is None


# =============================================================================
# Type id counter and malformed values
# =============================================================================


class TestLoadTypeCounter:
    """The loaded counter never lets add_maintenance_type reuse a stored id."""

    def test_stale_counter_raised_to_highest_id(self, tmp_path):
        yaml_file = tmp_path / "registry.yaml"
        yaml_file.write_text("""
lastTypeId: 1
types:
  - id: 1
    name: Oil Change
    recommendedInterval: 5000
  - id: 2
    name: Brakes
    recommendedInterval: 15000
""")
        registry = load_registry(yaml_file)

        assert registry.state.last_type_id == 2
        assert registry.add_maintenance_type("Coolant", "", 30000) == 3
        assert registry.get_maintenance_type(2).name == "Brakes"

    def test_counter_above_highest_id_kept(self, tmp_path):
        yaml_file = tmp_path / "registry.yaml"
        yaml_file.write_text("""
lastTypeId: 7
types:
  - id: 2
    name: Brakes
    recommendedInterval: 15000
""")
        registry = load_registry(yaml_file)
        assert registry.add_maintenance_type("Coolant", "", 30000) == 8

    def test_duplicate_type_ids_rejected(self, tmp_path):
        yaml_file = tmp_path / "registry.yaml"
        yaml_file.write_text("""
types:
  - id: 1
    name: Oil Change
    recommendedInterval: 5000
  - id: 1
    name: Brakes
    recommendedInterval: 15000
""")
        with pytest.raises(RegistryFileError, match="duplicate maintenance type id 1"):
            load_registry(yaml_file)


class TestLoadMalformedValues:
    """Values YAML accepts but the registry cannot hold."""

    def test_timestamp_value_rejected(self, tmp_path):
        yaml_file = tmp_path / "registry.yaml"
        yaml_file.write_text("""
schedules:
  - vehicleId: 1
    lastMaintenanceMileage: 10000
    maintenanceInterval: 5000
    nextMaintenanceMileage: 15000
    lastMaintenanceDate: 2024-01-01
""")
        with pytest.raises(RegistryFileError, match="unsupported value"):
            load_registry(yaml_file)

    def test_invalid_yaml_rejected(self, tmp_path):
        yaml_file = tmp_path / "registry.yaml"
        yaml_file.write_text("schedules: [unclosed\n")
        with pytest.raises(RegistryFileError, match="YAML parse error"):
            load_registry(yaml_file)
