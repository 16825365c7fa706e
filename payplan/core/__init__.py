# payplan/core/__init__.py
