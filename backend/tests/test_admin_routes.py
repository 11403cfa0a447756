from __future__ import annotations

from datetime import datetime

from cirec_admin.models import ContactSubmission, MonthlyNewsGrant, Page, PageBlock, RegistrationPrice

API = "/api/admin"


def _upload_news(client, *, month: str = "6", year: str = "2023", filename: str = "june.pdf"):
    return client.post(
        f"{API}/monthly-news",
        data={"month": month, "year": year, "forSample": "true"},
        files={"pdfFile": (filename, b"%PDF-1.4 body", "application/pdf")},
    )


def test_health_check(client) -> None:
    assert client.get("/api/system/health").json() == {"status": "ok", "version": "1.0.0"}


def test_user_crud_uses_camel_case(client) -> None:
    created = client.post(
        f"{API}/users",
        json={"firstName": "Jane", "lastName": "Doe", "username": "jdoe", "password": "pw", "type": "C"},
    )
    assert created.status_code == 201
    user_id = created.json()["data"]["id"]

    fetched = client.get(f"{API}/users/{user_id}").json()["data"]
    assert fetched["fullName"] == "Jane Doe"
    assert fetched["isNew"] is True
    assert "password" not in fetched

    duplicate = client.post(f"{API}/users", json={"firstName": "J", "username": "jdoe", "password": "pw"})
    assert duplicate.status_code == 409
    assert duplicate.json()["code"] == "DUPLICATE_USERNAME"

    assert client.put(f"{API}/users/{user_id}/status", json={"status": True}).status_code == 200
    assert client.get(f"{API}/users/{user_id}").json()["data"]["status"] is True

    assert client.delete(f"{API}/users/{user_id}").status_code == 200
    missing = client.get(f"{API}/users/{user_id}")
    assert missing.status_code == 404
    assert missing.json()["message"] == "User not found"


def test_access_summary_and_update(client, subscriber, db_session) -> None:
    db_session.add(MonthlyNewsGrant(username="jdoe", start_date=datetime(2024, 1, 1), end_date=datetime(2099, 1, 1)))
    db_session.commit()

    summary = client.get(f"{API}/users/{subscriber.id}/access").json()["data"]
    assert summary["userType"] == "Corporate"
    assert summary["access"]["monthlyNews"]["hasAccess"] is True
    assert summary["access"]["searchEngineAccess"]["hasAccess"] is False
    assert summary["access"]["otherReports"] == {"centralEuropeanOlefins": False, "polishChemicalProduction": False}

    updated = client.put(
        f"{API}/users/{subscriber.id}/access",
        json={
            "removeMnews": True,
            "seaAccess": True,
            "seaDuration": 2,
            "additionalCopiesAccess": True,
            "additionalCopiesEmails": ["copy@example.com"],
        },
    )
    assert updated.status_code == 200

    access = client.get(f"{API}/users/{subscriber.id}/access").json()["data"]["access"]
    assert access["monthlyNews"]["hasAccess"] is False
    assert access["searchEngineAccess"]["hasAccess"] is True
    assert access["additionalCopies"]["emails"] == ["copy@example.com"]


def test_access_of_unknown_user(client) -> None:
    response = client.get(f"{API}/users/999/access")

    assert response.status_code == 404
    assert response.json()["code"] == "SUBSCRIBER_NOT_FOUND"


def test_monthly_news_upload(client, settings) -> None:
    created = _upload_news(client)
    assert created.status_code == 201
    data = created.json()["data"]
    assert data["issueNo"] == 390
    assert data["pdfLink"] == "06-JUN 2023.pdf"
    assert data["forSample"] is True
    assert (settings.news_pdf_dir / "06-JUN 2023.pdf").exists()

    again = _upload_news(client)
    assert again.status_code == 409
    assert again.json()["code"] == "PERIODICAL_EXISTS"

    wrong_type = _upload_news(client, month="7", filename="july.txt")
    assert wrong_type.status_code == 400
    assert wrong_type.json()["message"] == "Please upload a PDF file"

    listed = client.get(f"{API}/monthly-news").json()["data"]
    assert [item["month"] for item in listed] == [6]

    sample = client.patch(f"{API}/monthly-news/{data['id']}/sample", json={"value": False})
    assert sample.json()["data"]["forSample"] is False

    assert client.delete(f"{API}/monthly-news/{data['id']}").status_code == 200
    assert not (settings.news_pdf_dir / "06-JUN 2023.pdf").exists()


def test_cis_news_is_a_separate_series(client, settings) -> None:
    _upload_news(client)

    response = client.post(
        f"{API}/cis-news",
        data={"month": "6", "year": "2023"},
        files={"pdfFile": ("cis.pdf", b"%PDF-1.4 body", "application/pdf")},
    )

    assert response.status_code == 201
    assert response.json()["data"]["issueNo"] == 150
    assert (settings.cis_news_pdf_dir / "06-JUN 2023.pdf").exists()


def test_excel_import_endpoint(client, make_workbook) -> None:
    workbook = make_workbook([("Product", "Group"), ("Methanol", "A")])

    response = client.post(
        f"{API}/excel-import",
        data={"importType": "1"},
        files={"file": ("products.xlsx", workbook, "application/octet-stream")},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "rowsImported": 1, "message": "Successfully imported 1 records"}
    products = client.get(f"{API}/products").json()["data"]
    assert [product["name"] for product in products] == ["Methanol"]


def test_excel_import_rejects_other_file_types(client) -> None:
    response = client.post(
        f"{API}/excel-import",
        data={"importType": "1"},
        files={"file": ("products.csv", b"Product\nMethanol\n", "text/csv")},
    )

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_excel_import_precondition(client, make_workbook) -> None:
    response = client.post(
        f"{API}/excel-import",
        data={"importType": "3"},
        files={"file": ("period.xlsx", make_workbook([("Product", "Methanol")]), "application/octet-stream")},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "IMPORT_PRECONDITION_FAILED"


def test_articles_endpoints(client) -> None:
    created = client.post(
        f"{API}/articles",
        json={"content": "<h4>One</h4><p>a</p><h4>Two</h4><p>b</p>", "date": "05/01/2024"},
    )
    assert created.status_code == 201
    ids = [article["id"] for article in created.json()["data"]]
    assert len(ids) == 2

    listing = client.get(f"{API}/articles", params={"page": 1, "limit": 10}).json()["data"]
    assert listing["total"] == 2
    assert listing["totalPages"] == 1

    scrolled = client.patch(f"{API}/articles/{ids[0]}/scrolling", json={"value": True})
    assert scrolled.json()["data"]["scrolling"] is True

    deleted = client.post(f"{API}/articles/bulk-delete", json={"ids": ids})
    assert deleted.json()["data"] == {"deleted": 2}


def test_article_date_format_is_validated(client) -> None:
    response = client.post(f"{API}/articles", json={"content": "<h4>One</h4>", "date": "2024-05-01"})

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_web_issue_endpoints(client) -> None:
    empty = client.get(f"{API}/issues/2024/3").json()["data"]
    assert empty["id"] is None

    created = client.post(f"{API}/issues", json={"month": 3, "year": 2024, "content": "<p>Hello</p>"})
    assert created.status_code == 201
    assert created.json()["data"]["issueNo"] == 315

    assert client.post(f"{API}/issues", json={"month": 3, "year": 2024}).status_code == 409
    assert client.put(f"{API}/issues/2024/4", json={"content": "x"}).status_code == 404


def test_event_display_toggle_returns_list(client) -> None:
    first = client.post(f"{API}/events", json={"title": "Petrochemical Forum", "venue": "Warsaw"}).json()["data"]
    client.post(f"{API}/events", json={"title": "Olefins Summit"})

    toggled = client.patch(f"{API}/events/{first['id']}/display", json={"value": False})

    events = toggled.json()["data"]
    assert len(events) == 2
    assert {event["title"]: event["display"] for event in events} == {
        "Petrochemical Forum": False,
        "Olefins Summit": True,
    }


def test_search_keyword_duplicate_conflicts(client) -> None:
    payload = {"userKeyword": "pvc", "suggestedKeyword": "polyvinyl chloride"}

    assert client.post(f"{API}/search-keywords", json=payload).status_code == 201
    duplicate = client.post(f"{API}/search-keywords", json=payload)

    assert duplicate.status_code == 409


def test_contacts_pagination_limits(client, db_session) -> None:
    db_session.add_all(ContactSubmission(name=f"Visitor {n}", email=f"v{n}@example.com") for n in range(3))
    db_session.commit()

    page = client.get(f"{API}/contacts/paginated", params={"page": 2, "limit": 2}).json()["data"]
    assert page["total"] == 3
    assert page["totalPages"] == 2
    assert len(page["contacts"]) == 1

    too_many = client.get(f"{API}/contacts/paginated", params={"limit": 101})
    assert too_many.status_code == 400
    assert too_many.json()["code"] == "VALIDATION_ERROR"


def test_page_content_blocks(client, db_session) -> None:
    db_session.add(Page(id=1, name="About us"))
    db_session.add(PageBlock(id=1, page_id=1, content="old"))
    db_session.commit()

    added = client.post(f"{API}/pages/1/contents")
    assert added.status_code == 201
    new_id = added.json()["data"]["id"]

    saved = client.put(
        f"{API}/pages/1/contents",
        json={"blocks": [{"id": 1, "content": "CIREC's mission"}, {"id": new_id, "content": "Team"}]},
    )
    assert [block["content"] for block in saved.json()["data"]] == ["CIREC s mission", "Team"]

    assert client.put(f"{API}/pages/1/contents", json={"blocks": [{"id": 99, "content": "x"}]}).status_code == 404


def test_registration_price_update(client, db_session) -> None:
    db_session.add(RegistrationPrice(id=1, name="Annual", price=100.0, option_id=1))
    db_session.commit()

    response = client.put(f"{API}/cost-management/prices/1", json={"price": 120.5})

    assert response.json()["data"]["price"] == 120.5
    assert client.put(f"{API}/cost-management/prices/1", json={"price": -1}).status_code == 400
