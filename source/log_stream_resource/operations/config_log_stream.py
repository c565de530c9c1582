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

from resource_manager import ResourceManager
from log_stream_schema import (
    SENSITIVE_FIELDS,
    parse_properties,
    validate,
    requires_replacement,
    redact
)
from operations.operation_types import (
    CREATE,
    UPDATE,
    DELETE,
    REQUEST_TYPE,
    RESOURCE_PROPERTIES,
    OLD_RESOURCE_PROPERTIES,
    PHYSICAL_RESOURCE_ID,
    LOGICAL_RESOURCE_ID
)

# attributes returned to CloudFormation, readable with Fn::GetAtt
RESPONSE_ATTRIBUTES = {
    'Id': 'id',
    'Name': 'name',
    'Status': 'status',
    'AwsPartnerEventSource': 'aws_partner_event_source',
    'AzurePartnerTopic': 'azure_partner_topic'
}


class LogStreamNotFoundException(Exception):
    pass


def read_config(properties, log):
    config = parse_properties(properties)
    log.debug("[read_config] config: %s", redact(config))
    validate(config)
    return config


def fill_response_data(state, response_data):
    for attribute, key in RESPONSE_ATTRIBUTES.items():
        if key not in SENSITIVE_FIELDS and state.get(key) is not None:
            response_data[attribute] = state[key]


def execute(event, _, log, response_data):
    """
    Apply a CloudFormation request to the Auth0 log stream.
    Returns the physical resource id, the log stream id.
    """
    resource_manager = ResourceManager(log=log)

    if event[REQUEST_TYPE] == CREATE:
        config = read_config(event[RESOURCE_PROPERTIES], log)
        state = resource_manager.create(config)
        if state is None:
            raise LogStreamNotFoundException("Log stream was deleted right after its creation")

    elif event[REQUEST_TYPE] == UPDATE:
        log_stream_id = event[PHYSICAL_RESOURCE_ID]
        config = read_config(event[RESOURCE_PROPERTIES], log)
        old_config = parse_properties(event.get(OLD_RESOURCE_PROPERTIES, {}))

        if requires_replacement(old_config, config):
            # a new physical id makes CloudFormation delete the old log stream
            log.info("[execute] Immutable field changed, replacing log stream %s", log_stream_id)
            state = resource_manager.create(config)
        else:
            state = resource_manager.update(log_stream_id, config, old_config)

        if state is None:
            raise LogStreamNotFoundException("Log stream %s not found" % log_stream_id)

    elif event[REQUEST_TYPE] == DELETE:
        log_stream_id = event[PHYSICAL_RESOURCE_ID]
        # a failed create leaves the logical id as physical id, nothing to delete
        if log_stream_id != event[LOGICAL_RESOURCE_ID]:
            resource_manager.delete(log_stream_id)
        return log_stream_id

    else:
        return event.get(PHYSICAL_RESOURCE_ID, event[LOGICAL_RESOURCE_ID])

    fill_response_data(state, response_data)
    return state['id']
