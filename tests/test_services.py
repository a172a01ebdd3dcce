import asyncio
import os

from omegaconf import OmegaConf

from tilegrid_core.api.health import health_check
from tilegrid_core.models import DisplayHints
from tilegrid_core.services import GridService, LoggingService, ServiceInitializer, ServiceRegistry
from tilegrid_core.utils.config import (
    get_display_hints,
    get_fetch_config,
    get_layout_strategy_names,
    get_logging_config,
    get_source_config,
    get_viewport_config,
)
from tilegrid_core.utils.performance_monitor import PerformanceMonitor


def test_config_defaults(clean_config):
    assert get_display_hints() == DisplayHints(243, 15, 15, 3)
    assert get_layout_strategy_names() == ("shortest_column", "reverse_round_robin")
    assert get_source_config()["type"] == "simulated"
    assert get_fetch_config() == {"busy_delay": 0.1, "retry_initial_delay": 0.1, "retry_max_delay": 5.0}
    assert get_viewport_config() == {"initial_chunk": 10, "buffered_percentage": 1.0}


def test_config_reads_omegaconf(clean_config):
    clean_config.set_config(OmegaConf.create({
        "display": {"tile_width": 200, "columns": 4},
        "layout": {"prepend": "tallest_top"},
    }))
    assert get_display_hints() == DisplayHints(200, 15, 15, 4)
    assert get_layout_strategy_names() == ("shortest_column", "tallest_top")


def test_grid_service_rejects_unknown_strategy(clean_config):
    cfg = OmegaConf.create({"layout": {"append": "zigzag"}})
    assert asyncio.run(GridService().initialize(cfg)) is False


def test_grid_service_creates_grids_lazily(clean_config):
    clean_config.set_config({
        "source": {"simulated": {"num_tiles": 20, "latency": 0}},
        "layout": {"prepend": "tallest_top"},
    })
    service = GridService()
    assert asyncio.run(service.initialize()) is True

    grid = service.get_grid("main")
    assert service.get_grid("main") is grid
    assert grid.cache.prepend_strategy.name == "tallest_top"
    assert service.drop_grid("main") is True
    assert service.drop_grid("main") is False


def test_discarded_grids_release_their_sources(clean_config, make_source):
    service = GridService()
    dropped = make_source([10])
    replaced = make_source([10])
    kept = make_source([10])

    service.create_grid("a", source=dropped)
    assert service.drop_grid("a") is True
    assert dropped.closed

    service.create_grid("b", source=replaced)
    service.create_grid("b", source=kept)
    assert replaced.closed
    assert not kept.closed

    asyncio.run(service.shutdown())
    assert kept.closed
    assert service.find_grid("b") is None


def test_logging_service_adds_and_removes_sinks(tmp_path, monkeypatch, clean_config):
    monkeypatch.chdir(tmp_path)
    service = LoggingService()

    assert asyncio.run(service.initialize(OmegaConf.create({"server": {"debug": True}}))) is True
    assert os.path.isdir(tmp_path / "logs")
    assert service.log_path == os.path.join("logs", "tilegrid_core.log")
    assert service.handler_count == 2

    # Re-initializing replaces the sinks instead of stacking them
    assert asyncio.run(service.initialize()) is True
    assert service.handler_count == 2

    assert asyncio.run(service.shutdown()) is True
    assert service.handler_count == 0


def test_logging_file_sink_can_be_disabled(tmp_path, monkeypatch, clean_config):
    monkeypatch.chdir(tmp_path)
    clean_config.set_config({"logging": {"file": "", "level": "warning"}})
    service = LoggingService()

    assert asyncio.run(service.initialize()) is True
    assert service.log_path is None
    assert service.handler_count == 1
    assert not os.path.exists(tmp_path / "logs")
    asyncio.run(service.shutdown())


def test_logging_config_level(clean_config):
    assert get_logging_config()["level"] == "INFO"
    clean_config.set_config({"server": {"debug": True}})
    assert get_logging_config()["level"] == "DEBUG"
    clean_config.set_config({"server": {"debug": True}, "logging": {"level": "error"}})
    assert get_logging_config()["level"] == "ERROR"


def test_initializer_starts_and_stops_services(tmp_path, monkeypatch, clean_config):
    monkeypatch.chdir(tmp_path)
    cfg = OmegaConf.create({"source": {"simulated": {"num_tiles": 10, "latency": 0}}})
    initializer = ServiceInitializer()

    assert asyncio.run(initializer.initialize_all_services(cfg)) is True
    assert initializer.is_initialized()
    health = asyncio.run(health_check())
    assert health.data["services"] == {"logging": True, "grid": True, "app": True}

    assert asyncio.run(initializer.shutdown_all_services()) is True
    assert not initializer.is_initialized()
    assert ServiceRegistry.get_all() == {}


def test_performance_monitor_reports_milliseconds():
    monitor = PerformanceMonitor()
    monitor.record("grow_after", 0.5)
    monitor.record("grow_after", 1.5)
    monitor.increment_counter("requests")

    stats = monitor.get_stats("grow_after")
    assert stats["count"] == 2
    assert stats["avg"] == 1000.0
    assert monitor.get_all_stats()["counters"] == {"requests": 1}
    assert monitor.get_stats("grow_before") is None

    disabled = PerformanceMonitor(enabled=False)
    disabled.increment_counter("requests")
    assert disabled.get_counter("requests") == 0
