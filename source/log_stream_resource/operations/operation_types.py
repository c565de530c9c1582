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

# list of operation names as constants
AUTH0_LOG_STREAM = "Custom::Auth0LogStream"

CREATE = "Create"
UPDATE = "Update"
DELETE = "Delete"


# additional constants
RESOURCE_PROPERTIES = "ResourceProperties"
OLD_RESOURCE_PROPERTIES = "OldResourceProperties"
PHYSICAL_RESOURCE_ID = "PhysicalResourceId"
LOGICAL_RESOURCE_ID = "LogicalResourceId"
REQUEST_TYPE = "RequestType"
RESOURCE_TYPE = "ResourceType"
