import socket
import threading
from datetime import date
from http.server import BaseHTTPRequestHandler, HTTPServer
from urllib.parse import parse_qs, urlsplit

import pytest

from weatherstats.models import WeatherStats
from weatherstats.openmeteo import OpenMeteo, WeatherAPIError, add_months


class _Handler(BaseHTTPRequestHandler):
    def do_GET(self):
        server = self.server
        server.paths.append(self.path)
        self.send_response(server.status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(server.body)))
        self.end_headers()
        self.wfile.write(server.body)

    def log_message(self, *args):
        pass


@pytest.fixture
def server():
    httpd = HTTPServer(("127.0.0.1", 0), _Handler)
    httpd.paths = []
    httpd.status = 200
    httpd.body = b"{}"
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield httpd
    httpd.shutdown()
    httpd.server_close()


TODAY = date(2024, 5, 10)


def _api(port):
    return OpenMeteo(f"http://127.0.0.1:{port}/v1/archive", 2, today=TODAY)


def test_add_months_rolls_over_short_month():
    assert add_months(date(2024, 3, 31), -1) == date(2024, 3, 2)


def test_add_months_crosses_year():
    assert add_months(date(2023, 1, 15), -1) == date(2022, 12, 15)


@pytest.mark.parametrize("months", [-25, -12, -1, 0, 1, 7, 30])
@pytest.mark.parametrize("day", [date(2023, 1, 1), date(2024, 2, 28), date(2022, 11, 20)])
def test_add_months_round_trip(day, months):
    assert add_months(add_months(day, months), -months) == day


def test_dates_span_analysis_period():
    api = _api(80)
    assert api.end_date == "2024-05-10"
    assert api.start_date == add_months(TODAY, -2).isoformat()


def test_default_today_with_zero_months():
    api = OpenMeteo("http://localhost/archive", 0)
    assert api.start_date == api.end_date == date.today().isoformat()


def test_url_carries_all_query_parameters():
    api = _api(80)
    parts = urlsplit(api.url("52.1", "21.0", "weathercode"))
    assert parts.path == "/v1/archive"
    assert parse_qs(parts.query) == {
        "latitude": ["52.1"],
        "longitude": ["21.0"],
        "start_date": [api.start_date],
        "end_date": [api.end_date],
        "hourly": ["weathercode"],
    }


def test_get_weather_parses_response(server):
    server.body = b'{"hourly": {"weathercode": [0, 45, 3], "temperature_2m": [1.5, 2]}}'
    api = _api(server.server_port)
    stats = api.get_weather("52.1", "21.0", "temperature_2m")
    assert stats == WeatherStats(weather_codes=[0, 45, 3], temperature_2m=[1.5, 2.0])
    assert server.paths == [urlsplit(api.url("52.1", "21.0", "temperature_2m")).path
                            + "?" + urlsplit(api.url("52.1", "21.0", "temperature_2m")).query]


def test_get_weather_ignores_http_status(server):
    server.status = 500
    server.body = b'{"hourly": {"weathercode": [45]}}'
    stats = _api(server.server_port).get_weather("1", "2", "weathercode")
    assert stats.weather_codes == [45]


def test_get_weather_null_body_gives_empty_stats(server):
    server.body = b"null"
    stats = _api(server.server_port).get_weather("1", "2", "weathercode")
    assert stats == WeatherStats()


def test_get_weather_invalid_json(server):
    server.body = b"not json"
    with pytest.raises(WeatherAPIError, match="unmarshaling"):
        _api(server.server_port).get_weather("1", "2", "weathercode")


def test_get_weather_unreachable():
    sock = socket.socket()
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    with pytest.raises(WeatherAPIError, match="getting weather stats"):
        _api(port).get_weather("1", "2", "weathercode")