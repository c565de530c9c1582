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

import requests
import json

CFN_RESPONSE_TIMEOUT = 10


def build_response_body(event, context, response_status, response_data, resource_id, reason=None, no_echo=False):
    cw_logs_url = "https://console.aws.amazon.com/cloudwatch/home?region=%s#logEventViewer:group=%s;stream=%s" % (
        context.invoked_function_arn.split(':')[3], context.log_group_name, context.log_stream_name)

    return {
        'Status': response_status,
        'Reason': reason or ('See the details in CloudWatch Logs: ' + cw_logs_url),
        'PhysicalResourceId': resource_id,
        'StackId': event['StackId'],
        'RequestId': event['RequestId'],
        'LogicalResourceId': event['LogicalResourceId'],
        'NoEcho': no_echo,
        'Data': response_data
    }


def send_response(log, event, context, response_status, response_data, resource_id, reason=None, no_echo=False):
    """
    Send a response to an AWS CloudFormation custom resource.
        Parameters:
           event: The fields in a custom resource request
           context: The Lambda context, used to point the reason at the CloudWatch log stream
           response_status: Whether the function successfully completed - SUCCESS or FAILED
           response_data: The Data field of a custom resource response object
           resource_id: The physical id of the custom resource, the Auth0 log stream id once created
           reason: The error message if the function fails
           no_echo: Mask the response data in the CloudFormation console

        Returns: None
    """
    log.debug("[send_response] Start")

    response_url = event['ResponseURL']
    log.info("[send_response] Sending cfn response for %s", event['LogicalResourceId'])

    json_response_body = json.dumps(
        build_response_body(event, context, response_status, response_data, resource_id, reason, no_echo))
    log.debug("[send_response] Response status: %s, physical id: %s", response_status, resource_id)

    headers = {
        'content-type': '',
        'content-length': str(len(json_response_body))
    }

    try:
        response = requests.put(response_url,
                                data=json_response_body,
                                headers=headers,
                                timeout=CFN_RESPONSE_TIMEOUT)
        log.info("[send_response] Sending cfn response status code: %s", response.reason)

    except requests.exceptions.RequestException as error:
        log.error("[send_response] Failed executing requests.put(..)")
        log.error(str(error))

    log.debug("[send_response] End")
