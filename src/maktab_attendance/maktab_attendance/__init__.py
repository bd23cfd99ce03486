"""Maktab attendance package.

Organized by feature modules (teacher_attendance, progress) with a thin Flask
controller layer over service/repository layers.
"""
