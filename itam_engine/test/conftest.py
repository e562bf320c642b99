"""
Pytest configuration and shared fixtures
"""
import pytest

from itam_engine import create_app
from itam_engine.config import EngineConfig
from itam_engine.data.assets.asset_record import AssetRecord
from itam_engine.data.assets.reference_catalog import set_default_catalog


@pytest.fixture(scope='session')
def app():
    """Create Flask application for testing"""
    app = create_app(EngineConfig())
    app.config['TESTING'] = True
    yield app
    set_default_catalog(None)


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


@pytest.fixture
def laptop_payload():
    """A complete, valid end-user device in service"""
    return {
        'globalAssetId': 'AS-2024-000101',
        'class': 'Laptop',
        'manufacturer': 'Dell Inc.',
        'model': 'Latitude 7420',
        'serialNumber': 'DLX7420A1',
        'assetTag': 'PHILA-LAPTO-00101',
        'state': 'In Service',
        'owner': {'userId': 'u-17', 'upn': 'jordan.lee@example.com', 'displayName': 'Jordan Lee'},
        'location': {'site': 'Philadelphia', 'room': '4B'},
        'warranty': {'provider': 'Dell', 'start': '2024-01-15', 'end': '2027-01-15'},
        'purchase': {'po': 'PO-88121', 'date': '2024-01-10', 'unitCost': 1420.0, 'invoice': 'INV-5521'},
        'deviceGuids': {'intuneDeviceId': '6f1c2a7e-0b1d-4c55-9e0a-1f2b3c4d5e6f'},
        'docs': [],
        'security': {'edr': 'Defender', 'edrStatus': 'Active'},
    }


@pytest.fixture
def laptop(laptop_payload):
    return AssetRecord.from_dict(laptop_payload)


@pytest.fixture
def make_asset():
    """Factory building a record from wire-shape keyword fields"""
    def _make(**fields):
        payload = {'state': 'In Service', 'class': 'Laptop', 'model': 'Latitude 7420'}
        payload.update(fields)
        return AssetRecord.from_dict(payload)
    return _make
