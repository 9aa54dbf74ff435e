from __future__ import annotations

import pytest


def test_root(client):
    assert client.get("/").json() == {"ok": True, "service": "HealthMate"}


def test_welcome(client):
    body = client.get("/api/welcome").json()
    assert body["code"] == 0
    assert body["msg"] == "ok"
    assert body["data"]["greeting"] == "早上好，张阿姨"
    assert body["data"]["weather"] == {"icon": "sun", "desc": "晴朗", "temp": "23℃"}


def test_devices(client):
    body = client.get("/api/devices").json()
    assert body["code"] == 0
    assert [device["id"] for device in body["data"]] == [1, 2, 3, 4]
    assert body["data"][3]["name"] == "血压计"


def test_health_status(client):
    data = client.get("/api/health-status").json()["data"]
    assert data["heartRate"] == {"value": 75, "unit": "次/分", "range": "60-100", "percent": 75}
    assert data["sleep"]["value"] == 7.5


def test_news(client):
    body = client.get("/api/news").json()
    assert body["code"] == 200
    assert len(body["data"]) == 2


def test_recommendations(client):
    body = client.get("/api/products/recommendations").json()
    assert body["code"] == 200
    assert body["message"] == "success"
    assert [item["id"] for item in body["data"]] == [1, 2, 3, 4, 5]


def test_product_detail(client):
    body = client.get("/api/products/2").json()
    assert body["code"] == 200
    product = body["data"]
    assert product["id"] == "2"
    assert product["price"] == 158
    assert product["deliveryInfo"] == {"estimatedTime": "预计24小时内送达", "shippingFee": 0}
    assert "限时特惠" in product["tags"]


def test_missing_product_is_404(client):
    response = client.get("/api/products/99")
    assert response.status_code == 404
    assert response.json() == {"code": 404, "message": "商品不存在", "data": None}


def test_product_records_are_not_shared(client):
    from healthmate.services.content import catalog_store

    record = catalog_store.get_product("1")
    record["price"] = 1
    assert client.get("/api/products/1").json()["data"]["price"] == 128


def test_western_report(client):
    body = client.post("/api/health-reports/western", json={"userId": 1}).json()
    assert body["code"] == 200
    data = body["data"]
    assert data["user"] == {"name": "兰瑞泉", "gender": "男"}
    assert data["health_report"]["key_metrics"][2]["value"] == "106/60"
    assert data["conclusion"].startswith("健康状况良好")


def test_western_report_without_body(client):
    assert client.post("/api/health-reports/western").json()["code"] == 200


def test_tcm_report(client):
    body = client.post("/api/health-reports/tcm", json={}).json()
    assert body["message"] == "数据接收成功"
    assert body["status"] == "success"
    final = body["data"]["data"]["final_rtn"]
    assert final["report_time"] == "2025-06-24 09:57:52"
    assert final["patient_birthday"] == "2001-01-01"
    assert final["bmi"] == "24.69"
    assert final["zhongchengyao"] == ["六味地黄丸", "知柏地黄丸"]
    assert body["data"]["shangpin_id"] == "1"


@pytest.mark.parametrize("payload", [[1, 2], "text", 7])
@pytest.mark.parametrize("path", ["/api/health-reports/western", "/api/health-reports/tcm"])
def test_reports_ignore_non_object_criteria(client, path, payload):
    response = client.post(path, json=payload)
    assert response.status_code == 200
    assert response.json()["code"] == 200
