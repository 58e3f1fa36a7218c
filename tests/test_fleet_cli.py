#!/usr/bin/env python3
"""Tests for the fleet CLI formatting helpers and commands."""

from datetime import datetime, timezone

import pytest

from fleet import FleetStore, MaintenanceLog, OrderType, Vehicle
from fleet_cli import (
    format_cost,
    format_date,
    format_miles,
    format_percent,
    main,
    make_history_table,
    resolve_vehicle_refs,
    truncate,
)

VEHICLES_CSV = """name,make,model,year,mileage,dailyOperationCost
TRK-001,Freightliner,Cascadia,2021,150000,300
TRK-002,Volvo,VNL 860,2020,220000,320
"""

LOGS_CSV = """vehicleId,creationDate,completionDate,mileage,type,description,parts,laborCost
TRK-001,2026-01-01,2026-01-04,149000,Correctivo,Fallo en inyeccion,,500
TRK-999,2026-01-01,2026-01-04,1,Correctivo,Unknown truck,,500
"""

ROUTINES_CSV = """name,frequencyMileage,laborCost,parts
Inspeccion de Frenos,50000,200
Cambio de Aceite,25000,150,"[{""name"":""Filtro"",""cost"":40},{""name"":""Aceite"",""cost"":25,""quantity"":10}]"
"""


@pytest.fixture
def csv_files(tmp_path):
    vehicles = tmp_path / "vehicles.csv"
    vehicles.write_text(VEHICLES_CSV)
    logs = tmp_path / "logs.csv"
    logs.write_text(LOGS_CSV)
    routines = tmp_path / "routines.csv"
    routines.write_text(ROUTINES_CSV)
    return vehicles, logs, routines


class TestFormatters:
    """Tests for display helpers."""

    def test_format_miles(self):
        assert format_miles(150000) == "150,000"
        assert format_miles(None) == "-"

    def test_format_cost(self):
        assert format_cost(1500) == "$1,500.00"
        assert format_cost(0) == "$0.00"
        assert format_cost(None) == "-"

    def test_format_percent(self):
        assert format_percent(97.777) == "97.8%"
        assert format_percent(None) == "-"

    def test_format_date(self):
        assert format_date(datetime(2026, 1, 4, 15, 30)) == "2026-01-04"
        assert format_date(None) == "-"

    def test_truncate(self):
        assert truncate(None) == "-"
        assert truncate("short") == "short"
        assert truncate("this is a very long note", max_len=15) == "this is a ve..."


class TestMakeHistoryTable:
    """Tests for make_history_table."""

    def test_row_contents(self):
        log = MaintenanceLog(
            "v1",
            datetime(2026, 1, 1),
            datetime(2026, 1, 4),
            149000,
            OrderType.CORRECTIVO,
            "Fallo",
            labor_cost=500,
            downtime_cost=900,
            total_cost=1400,
        )
        assert make_history_table([log]) == [
            ["2026-01-04", "149,000", "Correctivo", "Fallo", "$900.00", "$1,400.00"]
        ]


class TestResolveVehicleRefs:
    """Tests for resolve_vehicle_refs."""

    def test_plate_is_replaced_by_id(self):
        store = FleetStore()
        vehicle = store.add_vehicle(Vehicle("TRK-001", "Volvo", "VNL", 2020, 1, 1))
        log = MaintenanceLog(
            "TRK-001",
            datetime(2026, 1, 1, tzinfo=timezone.utc),
            datetime(2026, 1, 2, tzinfo=timezone.utc),
            1,
            OrderType.PREVENTIVO,
            "x",
        )
        by_id = MaintenanceLog(
            vehicle.id, log.creation_date, log.completion_date, 1, log.type, "y"
        )
        unknown = MaintenanceLog(
            "TRK-404", log.creation_date, log.completion_date, 1, log.type, "z"
        )
        resolved = resolve_vehicle_refs([log, by_id, unknown], store)
        assert [r.vehicle_id for r in resolved] == [vehicle.id, vehicle.id, "TRK-404"]
        assert resolved[1] is by_id
        assert log.vehicle_id == "TRK-001"


class TestCommands:
    """End-to-end runs of the CLI against CSV files."""

    def test_summary(self, csv_files, capsys):
        vehicles, logs, _ = csv_files
        code = main(["--vehicles", str(vehicles), "--logs", str(logs), "summary"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Active vehicles: 2" in out
        assert "Open orders: 0" in out
        assert "Total cost (all logs): $1,400.00" in out
        assert "TRK-002" in out

    def test_vehicles(self, csv_files, capsys):
        vehicles, _, _ = csv_files
        code = main(["--vehicles", str(vehicles), "vehicles"])
        out = capsys.readouterr().out
        assert code == 0
        assert "TRK-001" in out
        assert "Freightliner Cascadia" in out
        assert "$320.00" in out
        assert "100.0%" in out

    def test_history_by_plate(self, csv_files, capsys):
        vehicles, logs, _ = csv_files
        code = main(
            ["--vehicles", str(vehicles), "--logs", str(logs), "history", "TRK-001"]
        )
        out = capsys.readouterr().out
        assert code == 0
        assert "Vehicle: TRK-001 - Freightliner Cascadia" in out
        assert "Log entries: 1" in out
        assert "$900.00" in out
        assert "$1,400.00" in out

    def test_history_empty(self, csv_files, capsys):
        vehicles, _, _ = csv_files
        code = main(["--vehicles", str(vehicles), "history", "TRK-002"])
        out = capsys.readouterr().out
        assert code == 0
        assert "No maintenance records" in out

    def test_history_unknown_vehicle(self, csv_files, capsys):
        vehicles, _, _ = csv_files
        code = main(["--vehicles", str(vehicles), "history", "TRK-404"])
        assert code == 1
        assert "Unknown vehicle" in capsys.readouterr().out

    def test_routines(self, csv_files, capsys):
        _, _, routines = csv_files
        code = main(["--routines", str(routines), "routines"])
        out = capsys.readouterr().out
        assert code == 0
        assert out.index("Cambio de Aceite") < out.index("Inspeccion de Frenos")
        assert "$290.00" in out
        assert "25,000" in out

    def test_missing_file(self, tmp_path, capsys):
        code = main(["--vehicles", str(tmp_path / "none.csv"), "summary"])
        assert code == 1
        assert "File not found" in capsys.readouterr().out

    def test_bad_config(self, csv_files, tmp_path, capsys):
        vehicles, _, _ = csv_files
        config = tmp_path / "fleet.yaml"
        config.write_text("oee:\n  clamp: maybe\n")
        code = main(["--config", str(config), "--vehicles", str(vehicles), "summary"])
        assert code == 1
        assert "Error: Invalid config" in capsys.readouterr().out
