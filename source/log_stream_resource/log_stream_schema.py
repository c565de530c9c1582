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


from lib.logging_util import REDACTED
from lib.log_stream_model import (
    SINK_TYPES,
    LOG_STREAM_STATUS_ACTIVE,
    LOG_STREAM_STATUS_PAUSED,
    LOG_STREAM_STATUS_SUSPENDED,
    HTTP_CONTENT_FORMAT_JSONLINES,
    HTTP_CONTENT_FORMAT_JSONARRAY
)

STRING = 'string'
BOOL = 'bool'
SET = 'set'

TRUE_VALUES = {'true', 'yes', '1'}
FALSE_VALUES = {'false', 'no', '0'}


class ValidationError(Exception):
    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__('Invalid log stream configuration: ' + '; '.join(self.errors))


class Field(object):
    def __init__(self, kind=STRING, required=False, sensitive=False, force_new=False, computed=False,
                 valid_values=None, conflicts_with=(), required_with=()):
        self.kind = kind
        self.required = required
        self.sensitive = sensitive
        self.force_new = force_new
        self.computed = computed
        self.valid_values = valid_values
        self.conflicts_with = tuple(conflicts_with)
        self.required_with = tuple(required_with)


# ----------------------------------------------------------------------------------------------------------------------
# Configuration fields of a log stream. One group of sink fields per type:
#  - eventbridge requires aws_account_id and aws_region
#  - eventgrid requires azure_subscription_id, azure_resource_group and azure_region
#  - http requires http_endpoint, http_content_type, http_content_format and http_authorization
#  - datadog requires datadog_region and datadog_api_key
#  - splunk requires splunk_domain, splunk_token, splunk_port and splunk_secure
# ----------------------------------------------------------------------------------------------------------------------
SCHEMA = {
    'name': Field(required=True),
    'type': Field(
        required=True,
        sensitive=True,
        force_new=True,
        valid_values=tuple(SINK_TYPES)),
    'status': Field(
        valid_values=(LOG_STREAM_STATUS_ACTIVE, LOG_STREAM_STATUS_PAUSED, LOG_STREAM_STATUS_SUSPENDED)),

    'aws_account_id': Field(
        sensitive=True,
        force_new=True,
        conflicts_with=('azure_subscription_id', 'http_endpoint', 'datadog_api_key', 'splunk_token'),
        required_with=('aws_region',)),
    'aws_region': Field(
        sensitive=True,
        force_new=True,
        required_with=('aws_account_id',)),
    'aws_partner_event_source': Field(computed=True),

    'azure_subscription_id': Field(
        sensitive=True,
        force_new=True,
        conflicts_with=('aws_account_id', 'http_endpoint', 'datadog_api_key', 'splunk_token'),
        required_with=('azure_resource_group', 'azure_region')),
    'azure_resource_group': Field(
        sensitive=True,
        force_new=True,
        conflicts_with=('aws_account_id',),
        required_with=('azure_subscription_id', 'azure_region')),
    'azure_region': Field(
        sensitive=True,
        force_new=True,
        conflicts_with=('aws_account_id',),
        required_with=('azure_subscription_id', 'azure_resource_group')),
    'azure_partner_topic': Field(computed=True),

    'http_content_format': Field(
        valid_values=(HTTP_CONTENT_FORMAT_JSONLINES, HTTP_CONTENT_FORMAT_JSONARRAY),
        required_with=('http_endpoint', 'http_authorization', 'http_content_type')),
    'http_content_type': Field(
        required_with=('http_endpoint', 'http_authorization', 'http_content_format')),
    'http_endpoint': Field(
        conflicts_with=('aws_account_id', 'azure_subscription_id', 'datadog_api_key', 'splunk_token'),
        required_with=('http_content_format', 'http_authorization', 'http_content_type')),
    'http_authorization': Field(
        sensitive=True,
        required_with=('http_endpoint', 'http_content_format', 'http_content_type')),
    'http_custom_headers': Field(
        kind=SET,
        conflicts_with=('aws_account_id', 'azure_subscription_id', 'datadog_api_key', 'splunk_token')),

    'datadog_region': Field(
        conflicts_with=('aws_account_id', 'azure_subscription_id', 'http_endpoint', 'splunk_token'),
        required_with=('datadog_api_key',)),
    'datadog_api_key': Field(
        sensitive=True,
        force_new=True,
        required_with=('datadog_region',)),

    'splunk_domain': Field(
        required_with=('splunk_token', 'splunk_port', 'splunk_secure')),
    'splunk_token': Field(
        sensitive=True,
        conflicts_with=('aws_account_id', 'azure_subscription_id', 'http_endpoint', 'datadog_api_key'),
        required_with=('splunk_domain', 'splunk_port', 'splunk_secure')),
    'splunk_port': Field(
        required_with=('splunk_domain', 'splunk_token', 'splunk_secure')),
    'splunk_secure': Field(
        kind=BOOL,
        required_with=('splunk_domain', 'splunk_port', 'splunk_token')),
}

SENSITIVE_FIELDS = frozenset(k for k, f in SCHEMA.items() if f.sensitive)
IMMUTABLE_FIELDS = frozenset(k for k, f in SCHEMA.items() if f.force_new)
COMPUTED_FIELDS = frozenset(k for k, f in SCHEMA.items() if f.computed)


def is_set(value) -> bool:
    return value is not None and value != '' and value != set()


def coerce(key, value):
    kind = SCHEMA[key].kind
    if kind == BOOL:
        if isinstance(value, bool):
            return value
        normalized = str(value).strip().lower()
        if normalized in TRUE_VALUES:
            return True
        if normalized in FALSE_VALUES:
            return False
        raise ValidationError(["%s must be a boolean" % key])

    if kind == SET:
        # header values may contain commas, several headers come as a CloudFormation list
        if isinstance(value, str):
            value = [value]
        return {str(item).strip() for item in value if str(item).strip()}

    return str(value)


def parse_properties(properties: dict) -> dict:
    """
    Turn custom resource properties into a log stream configuration: unknown
    properties (ServiceToken, ...) and empty values are dropped, and the strings
    CloudFormation sends are coerced to the field kinds.
    """
    config = {}
    for key in SCHEMA:
        value = properties.get(key)
        if not is_set(value):
            continue
        value = coerce(key, value)
        if is_set(value):
            config[key] = value
    return config


def validate(config: dict) -> None:
    errors = []
    for key, field in SCHEMA.items():
        value = config.get(key)

        if not is_set(value):
            if field.required:
                errors.append("%s is required" % key)
            continue

        if field.computed:
            errors.append("%s is computed and cannot be set" % key)

        if field.valid_values is not None and value not in field.valid_values:
            # never echo sensitive values
            shown = REDACTED if field.sensitive else value
            errors.append("%s must be one of %s, got %s" % (key, ', '.join(field.valid_values), shown))

        conflicts = [other for other in field.conflicts_with if is_set(config.get(other))]
        if conflicts:
            errors.append("%s conflicts with %s" % (key, ', '.join(conflicts)))

        missing = [other for other in field.required_with if not is_set(config.get(other))]
        if missing:
            errors.append("%s requires %s" % (key, ', '.join(missing)))

    if errors:
        raise ValidationError(errors)


def requires_replacement(old_config: dict, new_config: dict) -> bool:
    return any(old_config.get(key) != new_config.get(key) for key in IMMUTABLE_FIELDS)


def redact(config: dict) -> dict:
    return {k: (REDACTED if k in SENSITIVE_FIELDS and is_set(v) else v) for k, v in config.items()}
