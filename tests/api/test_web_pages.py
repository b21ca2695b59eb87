"""Tests for the dashboard page views."""

from datetime import datetime, timedelta, timezone

import pytest


@pytest.fixture
def make_report(client):
    def _make(student_id: str, report_date: str, **fields) -> dict:
        body = {
            "student_id": student_id,
            "title": "Progress",
            "subject": "Math",
            "attendance": 90,
            "report_date": report_date,
        }
        body.update(fields)
        response = client.post("/reports", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


class TestDashboard:
    def test_dashboard_empty(self, client):
        data = client.get("/pages/dashboard").json()
        assert data["total_students"] == 0
        assert data["total_tutors"] == 0
        assert data["average_attendance"] == 0
        assert data["next_sessions"] == []

    def test_dashboard_summary(self, client, make_student, make_tutor, make_session):
        a = make_student(attendance=90)
        make_student(attendance=85)
        tutor = make_tutor(earnings=1500)
        make_tutor(earnings=250.5)
        make_session(a["id"], tutor["id"], days_from_now=3, title="soon")
        make_session(a["id"], tutor["id"], days_from_now=1, title="sooner")
        make_session(a["id"], tutor["id"], days_from_now=-2, title="done")

        data = client.get("/pages/dashboard").json()
        assert data["total_students"] == 2
        assert data["total_tutors"] == 2
        assert data["upcoming_sessions"] == 2
        assert data["completed_sessions"] == 1
        assert data["average_attendance"] == 87.5
        assert data["total_earnings"] == 1750.5
        assert [s["title"] for s in data["next_sessions"]] == ["sooner", "soon"]


class TestStudentsPage:
    def test_paginates_five_per_page(self, client, make_student):
        for i in range(7):
            make_student(first_name=f"Student{i}", last_name="Test")

        first = client.get("/pages/students").json()
        assert len(first["items"]) == 5
        assert first["total"] == 7
        assert first["total_pages"] == 2
        assert (first["start"], first["end"]) == (1, 5)
        assert first["has_next"] is True
        assert first["has_previous"] is False

        second = client.get("/pages/students", params={"page": 2}).json()
        assert len(second["items"]) == 2
        assert (second["start"], second["end"]) == (6, 7)
        assert second["has_next"] is False
        assert second["has_previous"] is True

    def test_page_past_end_is_clamped(self, client, make_student):
        make_student()
        data = client.get("/pages/students", params={"page": 9}).json()
        assert data["page"] == 1
        assert len(data["items"]) == 1

    def test_search_and_grade_filter(self, client, make_student):
        make_student(first_name="Emma", last_name="Wilson", grade="10th Grade")
        make_student(first_name="Liam", last_name="Chen", grade="11th Grade")
        make_student(first_name="Emmett", last_name="Brown", grade="11th Grade")

        data = client.get("/pages/students", params={"search": "EMM"}).json()
        assert sorted(r["name"] for r in data["items"]) == ["Emma Wilson", "Emmett Brown"]

        data = client.get(
            "/pages/students", params={"search": "emm", "grade": "11th Grade"}
        ).json()
        assert [r["name"] for r in data["items"]] == ["Emmett Brown"]
        assert data["grades"] == ["10th Grade", "11th Grade"]

    def test_empty_result(self, client):
        data = client.get("/pages/students", params={"search": "nobody"}).json()
        assert data["items"] == []
        assert data["total_pages"] == 0
        assert data["start"] == 0


class TestStudentProfile:
    def test_profile(self, client, make_student, make_tutor, make_session):
        student = make_student(
            first_name="Emma", last_name="Wilson", attendance=80, email="emma@example.com"
        )
        other = make_student()
        tutor = make_tutor()
        for days in range(-6, 1):
            make_session(student["id"], tutor["id"], days_from_now=days, title=f"d{days}")
        make_session(other["id"], tutor["id"])

        data = client.get(f"/pages/students/{student['id']}").json()
        assert data["email"] == "emma@example.com"
        assert data["initials"] == "EW"
        assert data["attendance_level"] == "medium"
        assert data["student"]["sessions"] == 7
        titles = [s["title"] for s in data["recent_sessions"]]
        assert titles == ["d0", "d-1", "d-2", "d-3", "d-4"]

    def test_profile_not_found(self, client):
        response = client.get("/pages/students/unknown")
        assert response.status_code == 404
        assert response.json() == {"error": "Student not found"}


class TestSessionsPage:
    def test_status_filter(self, client, make_student, make_tutor, make_session):
        student = make_student()
        tutor = make_tutor()
        make_session(student["id"], tutor["id"], days_from_now=2, title="up")
        make_session(student["id"], tutor["id"], days_from_now=-2, title="done")

        data = client.get("/pages/sessions", params={"status": "Completed"}).json()
        assert [s["title"] for s in data["items"]] == ["done"]

        data = client.get("/pages/sessions", params={"status": "all"}).json()
        assert data["total"] == 2

    def test_date_range_inclusive(self, client, make_student, make_tutor, make_session):
        student = make_student()
        tutor = make_tutor()
        make_session(student["id"], tutor["id"], days_from_now=2, title="in")
        make_session(student["id"], tutor["id"], days_from_now=20, title="out")

        day = (datetime.now(timezone.utc) + timedelta(days=2)).date().isoformat()
        data = client.get(
            "/pages/sessions", params={"date_from": day, "date_to": day}
        ).json()
        assert [s["title"] for s in data["items"]] == ["in"]


class TestReportsPage:
    def test_filters_and_students(self, client, make_student, make_report):
        emma = make_student(first_name="Emma", last_name="Wilson")
        liam = make_student(first_name="Liam", last_name="Chen")
        make_report(emma["id"], "2025-03-01")
        make_report(emma["id"], "2025-03-20", status="Canceled")
        make_report(liam["id"], "2025-04-02")

        data = client.get("/pages/reports").json()
        assert data["total"] == 3
        assert sorted(data["students"]) == ["Emma Wilson", "Liam Chen"]

        data = client.get(
            "/pages/reports", params={"student": "Emma Wilson", "status": "Completed"}
        ).json()
        assert [r["date"] for r in data["items"]] == ["2025-03-01"]

        data = client.get(
            "/pages/reports", params={"date_from": "2025-03-10", "date_to": "2025-03-31"}
        ).json()
        assert [r["date"] for r in data["items"]] == ["2025-03-20"]

    def test_export_csv(self, client, make_student, make_report):
        emma = make_student(first_name="Emma", last_name="Wilson")
        make_report(emma["id"], "2025-03-01", subject="Algebra", attendance=95.5)

        response = client.get("/pages/reports/export", params={"format": "csv"})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="reports.csv"' in response.headers["content-disposition"]
        assert response.text.splitlines() == [
            "Date,Student,Subject,Status,Attendance",
            "2025-03-01,Emma Wilson,Algebra,Completed,95.5",
        ]

    def test_export_pdf_not_available(self, client):
        response = client.get("/pages/reports/export", params={"format": "pdf"})
        assert response.status_code == 501
        assert response.json() == {"error": "PDF export feature will be implemented soon."}

    def test_export_unknown_format(self, client):
        response = client.get("/pages/reports/export", params={"format": "xml"})
        assert response.status_code == 422


class TestCalendar:
    def test_groups_by_day(self, client, make_student, make_tutor, make_session):
        student = make_student()
        tutor = make_tutor()
        make_session(student["id"], tutor["id"], days_from_now=3, title="b")
        make_session(student["id"], tutor["id"], days_from_now=1, title="a")

        data = client.get("/pages/calendar").json()
        assert data["month"] is None
        dates = [d["date"] for d in data["days"]]
        assert dates == sorted(dates)
        assert sum(len(d["sessions"]) for d in data["days"]) == 2

    def test_month_filter(self, client, make_student, make_tutor, make_session):
        student = make_student()
        tutor = make_tutor()
        session = make_session(student["id"], tutor["id"], days_from_now=1)
        row = client.get(f"/sessions/{session['id']}").json()
        month = row["start_time"][:7]

        data = client.get("/pages/calendar", params={"month": month}).json()
        assert data["month"] == month
        assert len(data["days"]) == 1

        data = client.get("/pages/calendar", params={"month": "1999-01"}).json()
        assert data["days"] == []

    def test_invalid_month(self, client):
        response = client.get("/pages/calendar", params={"month": "2025-13"})
        assert response.status_code == 400
        assert "YYYY-MM" in response.json()["error"]
