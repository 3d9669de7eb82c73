"""
Common utility functions for API responses
"""
from rest_framework.response import Response
from rest_framework import status


def success_response(data=None, message="Success", status_code=status.HTTP_200_OK):
    """
    Standard success response format
    """
    response_data = {
        "code": 200,
        "msg": message,
        "data": data
    }
    return Response(response_data, status=status_code)


def error_response(message="Error", errors=None, status_code=status.HTTP_400_BAD_REQUEST):
    """
    Standard error response format
    """
    response_data = {
        "code": status_code,
        "msg": message
    }
    if errors:
        response_data["errors"] = errors
    return Response(response_data, status=status_code)


def result_response(result, message="Success", serializer=None,
                    status_code=status.HTTP_200_OK, error_status=status.HTTP_400_BAD_REQUEST):
    """
    Render a service Success/Failure in the standard envelope.

    ``serializer`` is an optional callable applied to the success payload.
    """
    if not result.ok:
        return error_response(result.error, status_code=error_status)

    data = serializer(result.data) if serializer else result.data
    return success_response(data, message, status_code=status_code)
