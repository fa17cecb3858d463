"""Numeric response codes returned in every API envelope."""

from __future__ import annotations

import enum


class ResponseCode(enum.IntEnum):
    """Response code taxonomy shared by success and error envelopes."""

    # accounts
    LOGIN_SUCCESS = 1000
    LOGIN_SUCCESS_WITH_FACEBOOK = 1001
    LOGIN_FAIL = 1005
    INVALID_TOKEN = 1006
    LOGIN_FAIL_WITH_FACEBOOK = 1007
    ACCOUNT_DISABLED = 1008
    CREATE_USER_SUCCESS = 1009
    USER_ALREADY_EXISTS = 1010
    CREATE_USER_FAILED = 1011
    ACCOUNT_ACTIVATED = 1012
    INVALID_CONFIRMATION_TOKEN = 1013
    PASSWORD_ALREADY_REQUESTED = 1014
    PASSWORD_RESET_REQUEST_MADE = 1015
    NO_SUCH_USER_EXIST = 1016
    PASSWORD_SUCCESSFULLY_RESET = 1017

    # users
    USER_FOUND = 2000
    USER_NOT_FOUND = 2001
    USER_LIST = 2002
    UPDATE_USER_SUCCESS = 2003
    UPDATE_USER_FAIL = 2004
    USER_DELETED = 2005
    FOLLOWING_THE_USER = 2006
    UNFOLLOWING_THE_USER = 2007
    CAN_NOT_FOLLOW = 2008
    USER_FOLLOWS = 2009
    USER_FOLLOWED_BY = 2010

    # media
    CREATE_MEDIA_SUCCESS = 3000
    MEDIA_FOUND = 3001
    MEDIA_NOT_FOUND = 3002
    MEDIA_DELETED = 3003
    MEDIA_LIST = 3004
    CREATE_COMMENT_SUCCESS = 3005
    COMMENT_LIST = 3006

    # generic
    VALIDATION_ERROR = 9000
    ACCESS_DENIED = 9001
    API_NOT_FOUND = 9002
    INTERNAL_SERVER_ERROR = 9003
    BAD_REQUEST = 9004


__all__ = ["ResponseCode"]
