"""
Main entry point for the registrar platform.
"""

import argparse
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from .api.rest_api import RegistrarRestAPI
from .config import load_config
from .core.enums import SpecializationType
from .core.scheduling import WeeklyMeeting
from .services import EnrollmentService

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


class RegistrarPlatform:
    """Owns the enrollment service and the REST app built on it."""
    
    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self._config = config or load_config()
        self._enrollment_service = EnrollmentService(
            gpa_workers=self._config.get('gpa_workers', 4),
            gpa_threshold=self._config.get('gpa_threshold', 3),
        )
        self._rest_api = RegistrarRestAPI(self._enrollment_service)
        self._running = False
        logger.info("Registrar platform initialized")
    
    @property
    def enrollment_service(self) -> EnrollmentService:
        return self._enrollment_service
    
    @property
    def app(self):
        return self._rest_api.app
    
    def serve(self, host: Optional[str] = None, port: Optional[int] = None) -> None:
        """Serve the REST API until interrupted."""
        import uvicorn
        
        host = host or self._config.get('rest_host', '0.0.0.0')
        port = port or self._config.get('rest_port', 8000)
        self._running = True
        logger.info("REST API on http://%s:%s (docs at /docs)", host, port)
        try:
            uvicorn.run(self.app, host=host, port=port, log_level=self._config.get('log_level', 'info').lower())
        finally:
            self.stop()
    
    def stop(self) -> None:
        if not self._running:
            return
        self._enrollment_service.shutdown()
        self._running = False
        logger.info("Registrar platform stopped")
    
    def create_sample_data(self) -> Dict[str, Any]:
        """Create the Fall 2024 computer science catalog used by the demo."""
        service = self._enrollment_service
        service.add_faculty("Science")
        service.add_specialization("Computer Science", SpecializationType.MAJOR, "Science")
        service.add_specialization("Mathematics", SpecializationType.MINOR, "Science")
        
        cs101 = service.add_course("CS101", "Introduction to Programming", 3, 1, [
            WeeklyMeeting.from_strings("monday", "09:00", "10:30", "B-101"),
            WeeklyMeeting.from_strings("wednesday", "09:00", "10:30", "B-101"),
        ])
        cs102 = service.add_course("CS102", "Discrete Structures", 4, 30, [
            WeeklyMeeting.from_strings("tuesday", "11:00", "12:30", "B-102"),
        ])
        cs201 = service.add_course("CS201", "Data Structures", 3, 30, [
            WeeklyMeeting.from_strings("monday", "10:00", "11:30", "B-201"),
        ], prerequisite_ids=["CS101"])
        
        teacher = service.add_teacher("Dr. Rivera", "Science")
        students = [
            service.add_student("Alice Johnson", "Computer Science", "Mathematics"),
            service.add_student("Bob Smith", "Computer Science"),
        ]
        semester = service.add_semester(date(2024, 9, 2), date(2024, 12, 13))
        return {
            'semester': semester,
            'courses': [cs101, cs102, cs201],
            'teacher': teacher,
            'students': students,
        }
    
    def run_demo(self) -> List[str]:
        """Run the Fall 2024 registration walkthrough and return its log lines."""
        data = self.create_sample_data()
        service = self._enrollment_service
        semester = data['semester']
        teacher = data['teacher']
        student_ids = [s.id for s in data['students']]
        lines = [f"{semester} ({semester.weeks_number} weeks)"]
        
        for course in data['courses']:
            outcome = service.register(semester.semester_name, course.course_id, student_ids, teacher.id)
            lines.append(
                f"{course.course_id}: accepted={len(outcome.accepted)} "
                f"rejected={len(outcome.rejected_students())} over_capacity={len(outcome.over_capacity)} "
                f"aborted={outcome.aborted.value if outcome.aborted else None}"
            )
        
        first = data['students'][0]
        service.enter_grade(first.id, "CS101", "A")
        service.enter_grade(first.id, "CS102", "B+")
        gpa, gpa_status = service.student_gpa(first.id)
        lines.append(f"{first.name}: GPA {gpa:.2f} ({gpa_status.value})")
        lines.append(f"Statistics: {service.get_statistics()}")
        
        for line in lines:
            logger.info(line)
        return lines


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="University registrar platform")
    parser.add_argument("--rest-port", type=int, default=None, help="REST server port")
    parser.add_argument("--demo", action="store_true", help="Run demo mode")
    parser.add_argument("--config", type=str, help="Configuration file path")
    
    args = parser.parse_args(argv)
    
    config = load_config(args.config)
    configure_logging(config['log_level'])
    
    platform = RegistrarPlatform(config)
    
    if args.demo:
        try:
            for line in platform.run_demo():
                print(line)
        finally:
            platform.enrollment_service.shutdown()
        return 0
    
    platform.serve(port=args.rest_port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
