"""
Script to add sample data to the registrar via its REST API.
Make sure the server is running before executing this script.

Usage:
    python add_data.py
"""

import json
import os
import sys

import requests


def _console_supports_utf8() -> bool:
    enc = getattr(sys.stdout, "encoding", None)
    return enc is not None and "utf" in enc.lower()


_OK_CHAR = "✓" if _console_supports_utf8() else "[OK]"
_FAIL_CHAR = "✗" if _console_supports_utf8() else "[FAIL]"
_WARN_CHAR = "⚠" if _console_supports_utf8() else "[WARN]"


def _detect_base_url() -> str:
    """Determine a reachable BASE_URL.

    Priority: environment variable `REGISTRAR_BASE_URL`, then common local ports.
    If nothing responds, fall back to http://127.0.0.1:8000.
    """
    env = os.environ.get("REGISTRAR_BASE_URL")
    if env:
        return env

    candidates = [
        "http://127.0.0.1:8000",
        "http://127.0.0.1:8888",
        "http://localhost:8000",
    ]

    for c in candidates:
        try:
            resp = requests.get(f"{c}/health", timeout=0.5)
            if resp.status_code == 200:
                return c
        except requests.exceptions.RequestException:
            continue

    return candidates[0]


BASE_URL = _detect_base_url()


def check_server():
    """Check if the server is running."""
    try:
        response = requests.get(f"{BASE_URL}/health", timeout=2)
        if response.status_code == 200:
            print(f"{_OK_CHAR} Server is running")
            return True
    except requests.exceptions.RequestException:
        pass
    print(f"{_FAIL_CHAR} Server is not running!")
    print("\nPlease start the server first:")
    print("  python -m registrar.main --rest-port 8000")
    return False


def _post(path, data, label):
    """POST ``data`` and return the decoded body, or None on failure."""
    try:
        response = requests.post(f"{BASE_URL}{path}", json=data, timeout=5)
    except requests.exceptions.RequestException as e:
        print(f"{_FAIL_CHAR} Error creating {label}: {e}")
        return None
    if response.status_code in (200, 201):
        print(f"{_OK_CHAR} Created {label}")
        return response.json()
    print(f"{_FAIL_CHAR} Failed to create {label}: {response.text}")
    return None


def create_course(course_id, course_name, credit_hours, capacity, meetings, prerequisites=None):
    """Create a course with its weekly meetings."""
    data = {
        "course_id": course_id,
        "course_name": course_name,
        "credit_hours": credit_hours,
        "capacity": capacity,
        "meetings": [
            {"day": day, "start_time": start, "end_time": end, "room": room}
            for day, start, end, room in meetings
        ],
        "prerequisites": prerequisites or [],
    }
    return _post("/courses", data, f"course {course_id} - {course_name}")


def create_student(name, major, minor=None):
    return _post("/students", {"name": name, "major": major, "minor": minor}, f"student {name}")


def register(semester, course_id, teacher_id, student_ids):
    """Register a course and report who got in."""
    data = {
        "semester": semester,
        "course_id": course_id,
        "teacher_id": teacher_id,
        "student_ids": student_ids,
    }
    try:
        response = requests.post(f"{BASE_URL}/registrations", json=data, timeout=5)
    except requests.exceptions.RequestException as e:
        print(f"{_FAIL_CHAR} Error registering {course_id}: {e}")
        return None
    if response.status_code != 200:
        print(f"{_FAIL_CHAR} Failed to register {course_id}: {response.text}")
        return None
    result = response.json()
    if result["aborted"]:
        print(f"{_WARN_CHAR} {course_id} not registered: {result['aborted']}")
    else:
        print(f"{_OK_CHAR} {course_id}: {len(result['accepted'])} registered, "
              f"{len(result['rejected'])} rejected, {len(result['over_capacity'])} over capacity")
    return result


def get_statistics():
    """Get system statistics."""
    try:
        response = requests.get(f"{BASE_URL}/statistics", timeout=5)
    except requests.exceptions.RequestException as e:
        print(f"{_FAIL_CHAR} Error getting statistics: {e}")
        return None
    if response.status_code != 200:
        print(f"{_FAIL_CHAR} Failed to get statistics: {response.text}")
        return None
    stats = response.json()
    print(f"\n{'='*60}")
    print("System Statistics")
    print(f"{'='*60}")
    print(json.dumps(stats['statistics'], indent=2))
    return stats


def main():
    """Main execution."""
    print("="*60)
    print("Registrar - Data Addition Script")
    print("="*60)
    
    if not check_server():
        sys.exit(1)
    
    print("\nCreating faculty and specializations...")
    _post("/faculties", {"name": "Science"}, "faculty Science")
    _post("/specializations", {"name": "Computer Science", "type": "major", "faculty": "Science"},
          "major Computer Science")
    _post("/specializations", {"name": "Mathematics", "type": "minor", "faculty": "Science"},
          "minor Mathematics")
    
    print("\nCreating courses...")
    create_course("CS101", "Introduction to Programming", 3, 30,
                  [("monday", "09:00", "10:30", "B-101"), ("wednesday", "09:00", "10:30", "B-101")])
    create_course("CS201", "Data Structures", 4, 20,
                  [("tuesday", "13:00", "14:30", "B-201")], ["CS101"])
    create_course("MATH101", "Calculus I", 4, 35, [("thursday", "10:00", "11:30", "M-001")])
    
    print("\nCreating people...")
    students = [
        create_student("Alice Johnson", "Computer Science", "Mathematics"),
        create_student("Bob Smith", "Computer Science"),
        create_student("Carol Davis", "Computer Science"),
    ]
    teacher = _post("/teachers", {"name": "Dr. Rivera", "faculty": "Science"}, "teacher Dr. Rivera")
    semester = _post("/semesters", {"start_date": "2024-09-02", "end_date": "2024-12-13"}, "semester")
    
    if teacher and semester and all(students):
        print("\nRegistering courses...")
        student_ids = [s["id"] for s in students]
        for course_id in ("CS101", "CS201", "MATH101"):
            register(semester["semester_name"], course_id, teacher["id"], student_ids)
    
    get_statistics()
    
    print("\n" + "="*60)
    print(f"{_OK_CHAR} Sample data added successfully!")
    print("="*60)
    print(f"\n  - View API docs: {BASE_URL}/docs")
    print(f"  - List courses: curl {BASE_URL}/courses")
    print()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print(f"\n\n{_FAIL_CHAR} Interrupted by user")
        sys.exit(1)
