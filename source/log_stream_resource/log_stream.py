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
from lib.log_stream_model import (
    LogStream,
    SINK_TYPES,
    EventBridgeSink,
    EventGridSink,
    HTTPSink,
    DatadogSink,
    SplunkSink
)
from log_stream_schema import COMPUTED_FIELDS, IMMUTABLE_FIELDS

log = logging.getLogger()

# (sink attribute, configuration key) pairs of every sink variant
SINK_FIELDS = {
    EventBridgeSink: (
        ('account_id', 'aws_account_id'),
        ('region', 'aws_region'),
        ('partner_event_source', 'aws_partner_event_source'),
    ),
    EventGridSink: (
        ('subscription_id', 'azure_subscription_id'),
        ('resource_group', 'azure_resource_group'),
        ('region', 'azure_region'),
        ('partner_topic', 'azure_partner_topic'),
    ),
    HTTPSink: (
        ('endpoint', 'http_endpoint'),
        ('content_type', 'http_content_type'),
        ('content_format', 'http_content_format'),
        ('authorization', 'http_authorization'),
        ('custom_headers', 'http_custom_headers'),
    ),
    DatadogSink: (
        ('region', 'datadog_region'),
        ('api_key', 'datadog_api_key'),
    ),
    SplunkSink: (
        ('domain', 'splunk_domain'),
        ('token', 'splunk_token'),
        ('port', 'splunk_port'),
        ('secure', 'splunk_secure'),
    ),
}


def expand(config: dict, old_config: dict = None) -> LogStream:
    """
    Build the log stream to send to the Management API from a configuration.

    old_config is None for a new log stream. For an existing one, name is only
    sent when it changed and immutable fields (type and the credentials that
    force a new log stream) are never sent.
    """
    is_new = old_config is None

    log_stream = LogStream(status=config.get('status'))
    if is_new or config.get('name') != old_config.get('name'):
        log_stream.name = config.get('name')
    if is_new:
        log_stream.type = config.get('type')

    sink_class = SINK_TYPES.get(config.get('type'))
    if sink_class is None:
        # TODO: reject unknown types here once every caller validates first
        log.warning("[expand] Unsupported log stream type, the log stream is sent without a sink.")
        return log_stream

    log_stream.sink = expand_sink(sink_class, config, old_config)
    return log_stream


def expand_sink(sink_class, config: dict, old_config: dict = None):
    values = {}
    for attribute, key in SINK_FIELDS[sink_class]:
        if key in COMPUTED_FIELDS or (old_config is not None and key in IMMUTABLE_FIELDS):
            continue
        value = config.get(key)
        if value is None and old_config is not None and isinstance(old_config.get(key), (set, frozenset, list)):
            # an empty list clears the headers kept by Auth0, leaving the key out keeps them
            value = []
        if value is None:
            continue
        if isinstance(value, (set, frozenset)):
            value = sorted(value)
        values[attribute] = value
    return sink_class(**values)


def flatten(log_stream: LogStream) -> dict:
    config = {
        'name': log_stream.name,
        'type': log_stream.type,
        'status': log_stream.status,
    }
    config.update(flatten_sink(log_stream.sink))
    return config


def flatten_sink(sink) -> dict:
    # dispatch on the sink variant itself, a sink of unknown shape gives nothing
    sink_fields = SINK_FIELDS.get(type(sink))
    if sink_fields is None:
        return {}

    config = {}
    for attribute, key in sink_fields:
        value = getattr(sink, attribute)
        if isinstance(value, list):
            value = set(value)
        config[key] = value
    return config
