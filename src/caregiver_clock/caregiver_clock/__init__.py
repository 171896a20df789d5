"""Caregiver Clock package.

Organized by feature modules (attendance, caregivers) with a thin Flask
controller layer over service/repository layers. The attendance service owns
the clock-in/clock-out state machine and the schedule conflict rules.
"""
