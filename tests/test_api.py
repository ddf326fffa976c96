# tests/test_api.py

import pytest
from fastapi.testclient import TestClient

from retailpulse.api import main
from retailpulse.config import Settings
from retailpulse.insights import KeywordAssistant


@pytest.fixture
def client(monkeypatch):
    settings = Settings(bootstrap_samples=200, seed=42)
    monkeypatch.setattr(main.state, 'settings', settings)
    monkeypatch.setattr(main.state, 'assistant', KeywordAssistant(n_bootstrap=200, seed=42))
    main.state.session.clear()
    yield TestClient(main.app)
    main.state.session.clear()


@pytest.fixture
def loaded(client, csv_text):
    resp = client.post(
        '/dataset', files={'file': ('sales.csv', csv_text.encode(), 'text/csv')}
    )
    assert resp.status_code == 200
    return client


def test_health_without_data(client):
    body = client.get('/health').json()
    assert body['status'] == 'degraded'
    assert body['data_available'] is False


def test_endpoints_require_data(client):
    assert client.get('/metrics').status_code == 503
    assert client.post('/simulate', json={}).status_code == 503


def test_upload(client, csv_text):
    resp = client.post(
        '/dataset', files={'file': ('sales.csv', csv_text.encode(), 'text/csv')}
    )
    assert resp.json() == {
        'status': 'success', 'records': 6, 'stores': 2, 'source': 'sales.csv'
    }


def test_upload_missing_column(client):
    resp = client.post(
        '/dataset', files={'file': ('bad.csv', b'Store,Month\nA,Jan\n', 'text/csv')}
    )
    assert resp.status_code == 400
    assert 'Number Sold' in resp.json()['detail']


def test_metrics(loaded):
    body = loaded.get('/metrics').json()
    assert body['sales_volume'] == 2280
    assert body['inv_turnover'] == pytest.approx(3.8)
    assert body['rows_used'] == 6


def test_metrics_nan_as_null(client):
    csv = (
        'Store,Item Name,Month,Number Stored in Inventory,Number Sold,Cost (PHP),Revenue (PHP)\n'
        'S,A,Jan,0,10,1,0\n'
    )
    client.post('/dataset', files={'file': ('zero.csv', csv.encode(), 'text/csv')})
    body = client.get('/metrics').json()
    assert body['inv_turnover'] is None
    assert body['gross_profit_margin'] is None


def test_forecast(loaded):
    body = loaded.get('/forecast').json()
    assert body['weights'] == [0.6, 0.3, 0.1]
    assert body['total_forecast'] == pytest.approx(765)
    assert len(body['forecasts']) == 2
    assert body['series'] is None


def test_forecast_custom_weights_and_series(loaded):
    body = loaded.get(
        '/forecast', params={'weights': [0.5, 0.5], 'include_series': True}
    ).json()
    assert body['weights'] == [0.5, 0.5]
    assert len(body['series']) == 6
    assert body['series'][0]['Month'] == 'Jan'


def test_confidence_intervals_reproducible(loaded):
    first = loaded.get('/confidence-intervals').json()
    second = loaded.get('/confidence-intervals').json()
    assert first == second
    assert first['n_bootstrap'] == 200
    assert loaded.get('/confidence-intervals', params={'seed': 1}).json()['seed'] == 1


def test_simulate(loaded):
    body = loaded.post(
        '/simulate', json={'reorder_point': 150, 'lead_time_days': 7, 'safety_stock': 50}
    ).json()
    # Store A sells 650-670 against a capacity of 200
    assert body['summary']['total_potential_stockouts'] == 3
    assert body['summary']['total_holding_cost'] == pytest.approx(3 * 425 + 3 * 25)
    assert body['per_item_holding_cost'][0]['Item Name'] == 'Item X'


def test_simulate_rejects_negative(loaded):
    assert loaded.post('/simulate', json={'reorder_point': -1}).status_code == 422


def test_trends_scorecard_status(loaded):
    trends = loaded.get('/trends').json()
    assert [r['Month'] for r in trends['monthly_turnover']] == ['Jan', 'Feb', 'Mar']

    scorecard = loaded.get('/scorecard').json()
    assert len(scorecard['metrics_table']) == 3
    assert len(scorecard['qoi_summary']) == 6

    status = loaded.get('/status').json()
    assert status['level'] == 'warning'
    assert status['colors']['holding_period'] == 'green'


def test_trends_include_monthly_totals(loaded):
    totals = loaded.get('/trends').json()['monthly_totals']
    assert [r['total_sold'] for r in totals] == [750, 760, 770]
    assert totals[0]['trend'] == pytest.approx(750)


def test_financial(loaded):
    body = loaded.get('/financial').json()
    assert round(body['economics']['capital_released']) == 30149
    assert [r['Metric'] for r in body['impact']] == [
        'Baseline Cost', 'Target Cost', 'Annual Savings'
    ]
    ci = loaded.get('/confidence-intervals').json()['financial_ci']
    savings = body['impact'][2]
    assert [savings['CI_Low'], savings['CI_High']] == pytest.approx(ci)
    assert len(body['comparison_table']) == 8


def test_financial_requires_data(client):
    assert client.get('/financial').status_code == 503


def test_chat(client, csv_text):
    assert 'No data loaded' in client.post('/chat', json={'question': 'turnover'}).json()['answer']
    client.post('/dataset', files={'file': ('s.csv', csv_text.encode(), 'text/csv')})
    answer = client.post('/chat', json={'question': 'turnover'}).json()['answer']
    assert answer.startswith('Current Inventory Turnover Rate: 3.80')
