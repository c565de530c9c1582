######################################################################################################################
#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.                                                #
#                                                                                                                    #
#  Licensed under the Apache License, Version 2.0 (the "License"). You may not use this file except in compliance    #
#  with the License. A copy of the License is located at                                                             #
#                                                                                                                    #
#      http://www.apache.org/licenses/LICENSE-2.0                                                                    #
#                                                                                                                    #
#  or in the "license" file accompanying this file. This file is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES #
#  OR CONDITIONS OF ANY KIND, express or implied. See the License for the specific language governing permissions    #
#  and limitations under the License.                                                                                #
######################################################################################################################

import logging
from os import environ

REDACTED = '**********'
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def set_log_level(default_log_level='ERROR'):
    default_log_level = logging.getLevelName(default_log_level.upper())
    log_level = str(environ['LOG_LEVEL'].upper()) \
            if 'LOG_LEVEL' in environ else default_log_level

    log = logging.getLogger()

    if log_level not in VALID_LOG_LEVELS:
        log_level = 'ERROR'
    log.setLevel(log_level)

    return log


def redact_event(event, sensitive_keys):
    """
    Return a copy of a custom resource event that is safe to log.
    Values of sensitive_keys are masked in ResourceProperties and OldResourceProperties,
    and the pre-signed ResponseURL is dropped.
    """
    safe_event = {k: v for k, v in event.items() if k != 'ResponseURL'}
    for props_key in ('ResourceProperties', 'OldResourceProperties'):
        if props_key in event:
            safe_event[props_key] = {
                k: (REDACTED if k in sensitive_keys and v not in (None, '') else v)
                for k, v in event[props_key].items()
            }
    return safe_event
