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


from dataclasses import dataclass, field, fields
from typing import List, Optional, Union

LOG_STREAM_SINK_EVENTBRIDGE = 'eventbridge'
LOG_STREAM_SINK_EVENTGRID = 'eventgrid'
LOG_STREAM_SINK_HTTP = 'http'
LOG_STREAM_SINK_DATADOG = 'datadog'
LOG_STREAM_SINK_SPLUNK = 'splunk'

LOG_STREAM_STATUS_ACTIVE = 'active'
LOG_STREAM_STATUS_PAUSED = 'paused'
LOG_STREAM_STATUS_SUSPENDED = 'suspended'

HTTP_CONTENT_FORMAT_JSONLINES = 'JSONLINES'
HTTP_CONTENT_FORMAT_JSONARRAY = 'JSONARRAY'


def _wire(name):
    return field(default=None, metadata={'wire': name})


@dataclass
class EventBridgeSink:
    account_id: Optional[str] = _wire('awsAccountId')
    region: Optional[str] = _wire('awsRegion')
    partner_event_source: Optional[str] = _wire('awsPartnerEventSource')


@dataclass
class EventGridSink:
    subscription_id: Optional[str] = _wire('azureSubscriptionId')
    resource_group: Optional[str] = _wire('azureResourceGroup')
    region: Optional[str] = _wire('azureRegion')
    partner_topic: Optional[str] = _wire('azurePartnerTopic')


@dataclass
class HTTPSink:
    endpoint: Optional[str] = _wire('httpEndpoint')
    content_type: Optional[str] = _wire('httpContentType')
    content_format: Optional[str] = _wire('httpContentFormat')
    authorization: Optional[str] = _wire('httpAuthorization')
    custom_headers: Optional[List[str]] = _wire('httpCustomHeaders')


@dataclass
class DatadogSink:
    region: Optional[str] = _wire('datadogRegion')
    api_key: Optional[str] = _wire('datadogApiKey')


@dataclass
class SplunkSink:
    domain: Optional[str] = _wire('splunkDomain')
    token: Optional[str] = _wire('splunkToken')
    port: Optional[str] = _wire('splunkPort')
    secure: Optional[bool] = _wire('splunkSecure')


Sink = Union[EventBridgeSink, EventGridSink, HTTPSink, DatadogSink, SplunkSink]

# sink class for each log stream type
SINK_TYPES = {
    LOG_STREAM_SINK_EVENTBRIDGE: EventBridgeSink,
    LOG_STREAM_SINK_EVENTGRID: EventGridSink,
    LOG_STREAM_SINK_HTTP: HTTPSink,
    LOG_STREAM_SINK_DATADOG: DatadogSink,
    LOG_STREAM_SINK_SPLUNK: SplunkSink,
}


def is_sink(obj) -> bool:
    return type(obj) in SINK_TYPES.values()


def sink_to_payload(sink) -> dict:
    """Wire representation of a sink, without unset fields."""
    payload = {}
    for f in fields(sink):
        value = getattr(sink, f.name)
        if value is not None:
            payload[f.metadata['wire']] = value
    return payload


def sink_from_payload(sink_class, data: dict):
    kwargs = {}
    for f in fields(sink_class):
        if f.metadata['wire'] in data:
            kwargs[f.name] = data[f.metadata['wire']]
    return sink_class(**kwargs)


@dataclass
class LogStream:
    """
    A log stream as the Auth0 Management API knows it.

    sink holds one of the sink dataclasses when the type is known, the raw sink
    dict when the API returns a type this module does not know, or None.
    """
    id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    sink: Union[Sink, dict, None] = None

    def to_payload(self) -> dict:
        payload = {}
        for key in ('name', 'type', 'status'):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value

        if is_sink(self.sink):
            sink_payload = sink_to_payload(self.sink)
        else:
            sink_payload = dict(self.sink or {})
        if sink_payload:
            payload['sink'] = sink_payload
        return payload

    @classmethod
    def from_payload(cls, data: dict) -> 'LogStream':
        log_stream = cls()
        log_stream.merge_payload(data)
        return log_stream

    def merge_payload(self, data: dict) -> None:
        """Overwrite the fields present in an API response, as returned by create and update."""
        for key in ('id', 'name', 'type', 'status'):
            if key in data:
                setattr(self, key, data[key])

        if 'sink' in data:
            raw_sink = data['sink'] or {}
            sink_class = SINK_TYPES.get(self.type)
            self.sink = sink_from_payload(sink_class, raw_sink) if sink_class else raw_sink
