#!/usr/bin/env python3
"""
Demo scenario for the registrar: Fall 2024, one over-subscribed course,
a teacher conflict, grading and GPA.
"""

import logging
import os
import sys

# Add the project root to the Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from registrar.config import load_config
from registrar.main import RegistrarPlatform, configure_logging


def run_demo():
    """Run the demo scenario and print what happened."""
    print("=" * 60)
    print("REGISTRAR - FALL 2024 DEMO")
    print("=" * 60)
    
    config = load_config()
    config['gpa_workers'] = 2
    configure_logging(config['log_level'])
    
    platform = RegistrarPlatform(config)
    
    try:
        for line in platform.run_demo():
            print(f"  {line}")
        
        print("\n" + "=" * 60)
        print("DEMO COMPLETED")
        print("=" * 60)
    
    except Exception:
        logging.getLogger(__name__).exception("Demo failed")
        raise
    
    finally:
        platform.enrollment_service.shutdown()


if __name__ == "__main__":
    run_demo()
