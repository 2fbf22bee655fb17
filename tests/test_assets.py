import pytest
import socket
import sys
from pathlib import Path

import requests

sys.path.insert(0, str(Path(__file__).parent.parent))

from homeharness.assets import AssetOrigin, PageFixture
from homeharness.assets.origin import render_page
from homeharness.errors import AssetOriginError, BindError


class TestPageFixture:
    def test_generate(self):
        page = PageFixture.generate("http://127.0.0.1:8000/", 4)
        assert page.index == 4
        assert page.url == "http://127.0.0.1:8000/pages/generic4.html"
        assert page.title == "Test_Page_4"
        assert page.content == "Page content: 4"

    def test_generate_is_deterministic(self):
        assert PageFixture.generate("http://h:1", 2) == PageFixture.generate("http://h:1", 2)

    def test_index_below_one(self):
        with pytest.raises(ValueError):
            PageFixture.generate("http://h:1", 0)

    def test_index_must_be_int(self):
        with pytest.raises(TypeError):
            PageFixture.generate("http://h:1", "1")
        with pytest.raises(TypeError):
            PageFixture.generate("http://h:1", True)

    def test_to_dict(self):
        d = PageFixture.generate("http://h:1", 3).to_dict()
        assert d == {
            "index": 3,
            "url": "http://h:1/pages/generic3.html",
            "title": "Test_Page_3",
            "content": "Page content: 3",
        }

    def test_render_page(self):
        html = render_page(PageFixture.generate("http://h:1", 7))
        assert "<title>Test_Page_7</title>" in html
        assert 'id="content"' in html
        assert "Page content: 7" in html


class TestAssetOrigin:
    @pytest.fixture
    def origin(self):
        with AssetOrigin() as origin:
            yield origin

    def test_serves_page(self, origin):
        page = origin.get_page(1)
        resp = requests.get(page.url, timeout=5)
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert page.title in resp.text
        assert page.content in resp.text
        assert origin.request_count(1) == 1

    def test_same_index_same_fixture(self, origin):
        assert origin.get_page(3) is origin.get_page(3)

    def test_distinct_pages(self, origin):
        pages = [origin.get_page(i) for i in range(1, 6)]
        assert len({p.url for p in pages}) == 5
        assert len({p.content for p in pages}) == 5
        assert len({p.title for p in pages}) == 5

    def test_page_is_servable_without_get_page(self, origin):
        resp = requests.get(f"{origin.base_url}/pages/generic12.html", timeout=5)
        assert resp.status_code == 200
        assert "Page content: 12" in resp.text

    @pytest.mark.parametrize("path", [
        "/pages/generic0.html",
        "/pages/genericabc.html",
        "/pages/other.html",
        "/",
    ])
    def test_unknown_paths(self, origin, path):
        resp = requests.get(f"{origin.base_url}{path}", timeout=5)
        assert resp.status_code == 404

    def test_invalid_index(self, origin):
        with pytest.raises(ValueError):
            origin.get_page(0)

    def test_get_page_when_not_running(self):
        with pytest.raises(AssetOriginError):
            AssetOrigin().get_page(1)

    def test_base_url_before_start(self):
        with pytest.raises(AssetOriginError):
            AssetOrigin().base_url

    def test_ephemeral_port(self, origin):
        assert origin.is_running
        assert origin.port > 0
        assert origin.base_url == f"http://127.0.0.1:{origin.port}"

    def test_port_in_use(self):
        blocker = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        blocker.bind(("127.0.0.1", 0))
        blocker.listen(1)
        port = blocker.getsockname()[1]
        try:
            origin = AssetOrigin(port=port)
            with pytest.raises(BindError) as excinfo:
                origin.start()
            assert excinfo.value.port == port
            assert excinfo.value.host == "127.0.0.1"
            assert not origin.is_running
        finally:
            blocker.close()

    def test_bind_error_is_asset_origin_error(self):
        assert issubclass(BindError, AssetOriginError)
        assert not issubclass(BindError, AssertionError)

    def test_stop_is_idempotent(self):
        origin = AssetOrigin().start()
        origin.stop()
        origin.stop()
        assert not origin.is_running

    def test_stop_releases_port(self):
        origin = AssetOrigin().start()
        port = origin.port
        origin.stop()
        with pytest.raises(AssetOriginError):
            origin.get_page(1)

        again = AssetOrigin(port=port)
        try:
            again.start()
            assert again.port == port
        finally:
            again.stop()

    def test_context_manager_stops_on_error(self):
        origin = AssetOrigin()
        with pytest.raises(RuntimeError):
            with origin:
                assert origin.is_running
                raise RuntimeError("boom")
        assert not origin.is_running

    def test_instances_are_independent(self):
        with AssetOrigin() as first, AssetOrigin() as second:
            assert first.port != second.port
            assert first.get_page(1).url != second.get_page(1).url
            requests.get(first.get_page(1).url, timeout=5)
            assert first.request_count(1) == 1
            assert second.request_count(1) == 0
