"""
Configuration settings for Forge Authentication
"""
import os
from datetime import timedelta


class Config:
    """Flask application configuration"""
    
    # Flask secret key
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'
    
    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'forge.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    
    # Server
    HOST = os.environ.get('HOST') or '0.0.0.0'
    PORT = int(os.environ.get('PORT') or 3000)
    
    # Sessions (server-side, referenced by an HTTP-only cookie)
    FORGE_SESSION_LIFETIME = timedelta(hours=int(os.environ.get('FORGE_SESSION_HOURS') or 24))
    FORGE_SESSION_COOKIE_NAME = 'session_id'
    FORGE_SESSION_COOKIE_SECURE = os.environ.get('FORGE_SECURE_COOKIES', '').lower() in ('1', 'true', 'yes')
    FORGE_SESSION_BACKEND = os.environ.get('FORGE_SESSION_BACKEND') or 'memory'
    
    # Password hashing
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256:600000'
    
    # Demo account created on startup
    SEED_DEFAULT_USER = True
    DEFAULT_USER_EMAIL = 'forge@example.com'
    DEFAULT_USER_PHONE = '+1 (555) 123-4567'
    DEFAULT_USER_PASSWORD = 'password123'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256:1000'
    SEED_DEFAULT_USER = False
