import os

from cofoodie import performance_logger
from cofoodie.app_container import AppContainer
from cofoodie.config import Settings
from cofoodie.repositories import LocalStorageBackend, RemoteStorageBackend
from cofoodie.services import seed_database


# =========================================================================
# CONTENEDOR
# =========================================================================

def test_empty_url_selects_local_backend(local_container):
    assert isinstance(local_container.backend, LocalStorageBackend)
    assert local_container.storage.use_cloud is False


def test_url_selects_remote_backend(tmp_path):
    container = AppContainer(Settings(script_url='https://script.example.com/exec', data_dir=str(tmp_path)))
    assert isinstance(container.backend, RemoteStorageBackend)
    assert container.backend.url == 'https://script.example.com/exec'


def test_services_are_built_once(local_container):
    assert local_container.storage is local_container.storage
    assert local_container.report_service is local_container.report_service


def test_reset_rebuilds_services(local_container):
    first = local_container.storage
    local_container.reset()
    assert local_container.storage is not first


def test_local_data_lives_in_configured_dir(local_container, settings):
    local_container.storage.set_frontend_password('9999')
    assert os.listdir(settings.data_dir)


def test_report_service_reads_through_storage(local_container):
    storage = local_container.storage
    storage.clear_all_data()
    assert local_container.report_service.day_summary('2024-01-01')['count'] == 0


# =========================================================================
# SEMILLA
# =========================================================================

def test_seed_database_fills_empty_menus(local_storage):
    local_storage.clear_all_data()

    assert seed_database(local_storage) is True

    menus = local_storage.get_menu_categories()
    assert [m.id for m in menus] == ['MENU_001', 'MENU_002']
    assert [m.label for m in menus] == ['美味便當', '清涼飲料']
    assert [o.label for o in menus[0].config.options] == ['排骨飯', '雞腿飯', '鱈魚飯']


def test_seed_database_skips_when_menus_exist(local_storage):
    local_storage.clear_all_data()
    seed_database(local_storage)

    assert seed_database(local_storage) is False
    assert len(local_storage.get_menu_categories()) == 2


# =========================================================================
# PROFILING
# =========================================================================

def test_profiled_calls_are_counted(client):
    performance_logger.reset_stats()
    client.post('/', data='{"action": "GET_ALL_DATA"}', headers={'Content-Type': 'text/plain'})

    stats = performance_logger.get_function_stats()
    if performance_logger.ENABLE_PROFILING:
        assert stats['endpoint.handle_request']['calls'] == 1
    else:
        assert stats == {}


def test_log_summary_lists_known_files():
    summary = performance_logger.get_log_summary()
    assert set(summary) == {'performance', 'slow_routes', 'slow_functions'}
