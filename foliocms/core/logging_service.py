"""
Centralized logging service for FolioCMS.
Provides structured logging with request context and easy integration.
"""

import json
import logging
import traceback
from flask import request, has_request_context


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        try:
            ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
            if ip_address and ',' in ip_address:
                ip_address = ip_address.split(',')[0].strip()

            user_agent = request.headers.get('User-Agent', '')
            request_path = request.path

            return ip_address, user_agent, request_path
        except Exception:
            return None, None, None

    @staticmethod
    def log(level, source, message, details=None, user_id=None):
        """
        Log a message through the ``foliocms.<source>`` logger

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (projects, storage, auth, etc.)
            message (str): Main log message
            details (str/dict): Additional details (will be JSON-encoded if dict)
            user_id (str): Optional user identifier
        """
        ip_address, user_agent, request_path = LoggingService._get_request_context()

        if isinstance(details, dict):
            details = json.dumps(details, indent=2, default=str)

        extra = {
            'source': source,
            'details': details,
            'ip_address': ip_address,
            'user_agent': user_agent,
            'request_path': request_path,
            'user_id': user_id,
        }

        text = f"[{source}] {message}"
        if request_path:
            text += f" ({request_path})"
        if details:
            text += f"\nDetails: {details}"

        log_level = logging.getLevelName(level.upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO
        logging.getLogger(f"foliocms.{source}").log(log_level, text, extra=extra)

    @staticmethod
    def debug(source, message, details=None, user_id=None):
        """Log debug message"""
        LoggingService.log('DEBUG', source, message, details, user_id)

    @staticmethod
    def info(source, message, details=None, user_id=None):
        """Log info message"""
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        """Log warning message"""
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        """Log error message"""
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def critical(source, message, details=None, user_id=None):
        """Log critical message"""
        LoggingService.log('CRITICAL', source, message, details, user_id)

    @staticmethod
    def log_user_action(source, action, user_id=None, details=None):
        """Log user actions (login, logout, uploads, etc.)"""
        LoggingService.info(source, f"User action: {action}", details, user_id)

    @staticmethod
    def log_api_call(source, endpoint, method='GET', status_code=200, details=None):
        """Log API calls"""
        message = f"API {method} {endpoint} - Status: {status_code}"
        level = 'INFO' if 200 <= status_code < 400 else 'WARNING' if status_code < 500 else 'ERROR'
        LoggingService.log(level, source, message, details)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @staticmethod
    def log_security_event(message, details=None, ip_address=None):
        """Log security-related events"""
        if ip_address:
            details = details or {}
            details['provided_ip'] = ip_address

        LoggingService.warning('security', message, details)


# Convenience instance for easy importing
logger = LoggingService()
