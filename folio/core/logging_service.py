"""
Centralized logging service for the Folio application.
Adds request context to log records so admin actions and security events
can be traced back to a client.
"""

import json
import logging
import traceback
from flask import request, has_request_context

_logger = logging.getLogger('folio')


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
        if ip_address and ',' in ip_address:
            ip_address = ip_address.split(',')[0].strip()

        user_agent = request.headers.get('User-Agent', '')
        return ip_address, user_agent, request.path

    @staticmethod
    def log(level, source, message, details=None):
        """
        Log a message with request context

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (messages, projects, storage, etc.)
            message (str): Main log message
            details (str/dict): Additional details (JSON-encoded if dict)
        """
        ip_address, user_agent, request_path = LoggingService._get_request_context()

        if isinstance(details, dict):
            details = json.dumps(details, default=str)

        line = f"[{source}] {message}"
        if request_path:
            line += f" (path={request_path} ip={ip_address})"
        if details:
            line += f" details={details}"

        _logger.log(
            getattr(logging, level.upper(), logging.INFO),
            line,
            extra={
                'source': source,
                'ip_address': ip_address,
                'user_agent': user_agent,
                'request_path': request_path,
            },
        )

    @staticmethod
    def debug(source, message, details=None):
        LoggingService.log('DEBUG', source, message, details)

    @staticmethod
    def info(source, message, details=None):
        LoggingService.log('INFO', source, message, details)

    @staticmethod
    def warning(source, message, details=None):
        LoggingService.log('WARNING', source, message, details)

    @staticmethod
    def error(source, message, details=None):
        LoggingService.log('ERROR', source, message, details)

    @staticmethod
    def log_admin_action(source, action, details=None):
        """Log admin mutations (create, update, delete, reorder)"""
        LoggingService.info(source, f"Admin action: {action}", details)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc(),
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @staticmethod
    def log_security_event(message, details=None):
        """Log security-related events"""
        LoggingService.warning('security', message, details)


# Convenience instance for easy importing
logger = LoggingService()
