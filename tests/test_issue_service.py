"""Tests for the issue lifecycle manager."""
from datetime import date

import pytest

from cryptory.core.exceptions import CoinNotFound, InvalidAuthorId, IssueNotFound
from cryptory.models.issue import Issue
from cryptory.schemas.issue import IssueCreateRequest, IssueUpdateRequest
from cryptory.services.issue_service import IssueService, parse_author_id


@pytest.fixture
def service(db):
    return IssueService(db)


class TestCreate:
    def test_links_chart_of_same_date(self, db, service, bitcoin, make_chart):
        chart = make_chart(bitcoin, date(2024, 1, 10))
        request = IssueCreateRequest(date=date(2024, 1, 10), title="ETF", content="approved",
                                     news_title="ETF news", source="https://news.example.com")

        issue_id = service.create(bitcoin.id, request, "12")

        issue = db.get(Issue, issue_id)
        assert issue.chart_id == chart.id
        assert issue.coin_id == bitcoin.id
        assert issue.type == "MANUAL"
        assert issue.request_count == 0
        assert issue.is_deleted is False
        assert issue.user_id == 12
        assert issue.news_title == "ETF news"
        assert issue.created_at is not None

    def test_without_matching_chart(self, db, service, bitcoin, make_chart):
        make_chart(bitcoin, date(2024, 1, 9))

        issue_id = service.create(bitcoin.id, IssueCreateRequest(date=date(2024, 1, 10), title="T"), "3")

        assert db.get(Issue, issue_id).chart_id is None

    def test_invalid_author_creates_nothing(self, db, service, make_coin):
        coin = make_coin("KRW-SOL")

        with pytest.raises(InvalidAuthorId):
            service.create(coin.id, IssueCreateRequest(date=date(2024, 1, 10), title="T"), "abc")

        assert db.query(Issue).count() == 0

    def test_unknown_coin(self, db, service):
        with pytest.raises(CoinNotFound):
            service.create(5, IssueCreateRequest(date=date(2024, 1, 10), title="T"), "1")
        assert db.query(Issue).count() == 0


@pytest.mark.parametrize("raw, expected", [("12", 12), (" 7 ", 7), (3, 3)])
def test_parse_author_id(raw, expected):
    assert parse_author_id(raw) == expected


@pytest.mark.parametrize("raw", ["abc", "", None, "1.5", True])
def test_parse_author_id_rejects(raw):
    with pytest.raises(InvalidAuthorId):
        parse_author_id(raw)


class TestListForAdmin:
    def test_active_only_newest_first(self, service, bitcoin, make_issue):
        first = make_issue(bitcoin, title="first")
        make_issue(bitcoin, title="gone", is_deleted=True)
        second = make_issue(bitcoin, title="second", user_id=None)

        page = service.list_for_admin(bitcoin.id, 0, 10)

        assert page.total_elements == 2
        assert [s.issue_id for s in page.content] == [second.id, first.id]
        assert page.content[0].created_by == "Unknown"
        assert page.content[1].created_by == "1"

    def test_pagination(self, service, bitcoin, make_issue):
        for i in range(5):
            make_issue(bitcoin, title=f"issue {i}")

        page = service.list_for_admin(bitcoin.id, 2, 2)

        assert page.total_elements == 5
        assert page.total_pages == 3
        assert [s.title for s in page.content] == ["issue 0"]

    def test_other_coins_excluded(self, service, bitcoin, make_coin, make_issue):
        eth = make_coin("KRW-ETH")
        make_issue(eth)

        assert service.list_for_admin(bitcoin.id).content == []


class TestDetailAndUpdate:
    def test_admin_sees_deleted_issue(self, service, bitcoin, make_issue):
        issue = make_issue(bitcoin, is_deleted=True, title="retracted")

        detail = service.get_detail_for_admin(issue.id)

        assert detail.is_deleted is True
        assert detail.title == "retracted"
        assert detail.type == "MANUAL"
        assert detail.created_by == "1"

    def test_admin_detail_not_found(self, service):
        with pytest.raises(IssueNotFound):
            service.get_detail_for_admin(9)

    def test_partial_update_keeps_other_fields(self, db, service, bitcoin, make_issue):
        issue = make_issue(bitcoin, title="Old", content="old")

        service.update(issue.id, IssueUpdateRequest(title="New"))

        db.expire_all()
        updated = db.get(Issue, issue.id)
        assert updated.title == "New"
        assert updated.content == "old"
        assert updated.news_title == "News"
        assert updated.source == "https://news.example.com"

    def test_deleted_issue_can_be_updated(self, db, service, bitcoin, make_issue):
        issue = make_issue(bitcoin, is_deleted=True)

        service.update(issue.id, IssueUpdateRequest(content="fixed"))

        db.expire_all()
        updated = db.get(Issue, issue.id)
        assert updated.content == "fixed"
        assert updated.is_deleted is True

    def test_update_not_found(self, service):
        with pytest.raises(IssueNotFound):
            service.update(9, IssueUpdateRequest(title="New"))


class TestSoftDelete:
    def test_marks_found_and_ignores_missing(self, db, service, bitcoin, make_issue):
        a = make_issue(bitcoin)
        b = make_issue(bitcoin)
        keep = make_issue(bitcoin)

        service.bulk_soft_delete([a.id, b.id, 999])

        db.expire_all()
        assert db.get(Issue, a.id).is_deleted is True
        assert db.get(Issue, b.id).is_deleted is True
        assert db.get(Issue, keep.id).is_deleted is False
        assert db.query(Issue).count() == 3

    def test_idempotent(self, db, service, bitcoin, make_issue):
        issue = make_issue(bitcoin)

        service.bulk_soft_delete([issue.id])
        service.bulk_soft_delete([issue.id])

        db.expire_all()
        assert db.get(Issue, issue.id).is_deleted is True

    def test_deleted_issue_visibility(self, service, bitcoin, make_issue):
        issue = make_issue(bitcoin)
        service.bulk_soft_delete([issue.id])

        with pytest.raises(IssueNotFound):
            service.get_public_detail(bitcoin.id, issue.id)
        assert service.list_for_admin(bitcoin.id).content == []
        assert service.get_detail_for_admin(issue.id).is_deleted is True


class TestPublicDetail:
    def test_returns_body_only(self, service, bitcoin, make_issue):
        issue = make_issue(bitcoin, title="Halving", content="supply cut")

        detail = service.get_public_detail(bitcoin.id, issue.id)

        assert detail.model_dump() == {
            "title": "Halving",
            "content": "supply cut",
            "news_title": "News",
            "source": "https://news.example.com",
        }

    def test_not_found(self, service, bitcoin):
        with pytest.raises(IssueNotFound):
            service.get_public_detail(bitcoin.id, 123)

    def test_lookup_is_by_issue_id_only(self, service, bitcoin, make_coin, make_issue):
        eth = make_coin("KRW-ETH")
        issue = make_issue(bitcoin, title="Halving")

        detail = service.get_public_detail(eth.id, issue.id)

        assert detail.title == "Halving"

    def test_deleted_hidden_under_any_coin(self, service, bitcoin, make_coin, make_issue):
        eth = make_coin("KRW-ETH")
        issue = make_issue(bitcoin, is_deleted=True)

        for coin_id in (bitcoin.id, eth.id):
            with pytest.raises(IssueNotFound):
                service.get_public_detail(coin_id, issue.id)
