"""PWA Builder - scaffold a web app and package it as an Android APK."""

__version__ = "1.0.0"
