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


from logging import Logger
from typing import Optional
from lib.auth0_config import load_config
from lib.auth0_util import Auth0Management, ManagementError, is_not_found
from log_stream import expand, flatten


class LogStreamIdMissingException(Exception):
    pass


class ResourceManager:
    def __init__(self, log: Logger, api=None):
        self.log = log
        self.api = api or Auth0Management(log, load_config())

    # ----------------------------------------------------------------------------------------------------------------------
    # Create the log stream and read it back, so computed fields such as the AWS partner event source
    # or the Azure partner topic assigned by Auth0 are known.
    # Returns the state of the new log stream (flat configuration with its id), or None if it is already gone.
    # ----------------------------------------------------------------------------------------------------------------------
    def create(self, config: dict) -> Optional[dict]:
        self.log.info("[create] Start")

        log_stream = expand(config)
        self.api.log_stream.create(log_stream)
        if not log_stream.id:
            raise LogStreamIdMissingException("Auth0 did not return an id for the created log stream")
        self.log.info("[create] Created log stream %s", log_stream.id)

        state = self.read(log_stream.id)
        self.log.info("[create] End")
        return state

    # ----------------------------------------------------------------------------------------------------------------------
    # Read the log stream. A log stream that no longer exists is not an error: None is returned
    # and the caller drops its id.
    # ----------------------------------------------------------------------------------------------------------------------
    def read(self, log_stream_id: str) -> Optional[dict]:
        self.log.debug("[read] Start")

        try:
            log_stream = self.api.log_stream.read(log_stream_id)
        except ManagementError as error:
            if is_not_found(error):
                self.log.info("[read] Log stream %s not found", log_stream_id)
                return None
            raise

        state = flatten(log_stream)
        state['id'] = log_stream.id or log_stream_id

        self.log.debug("[read] End")
        return state

    def update(self, log_stream_id: str, config: dict, old_config: dict) -> Optional[dict]:
        self.log.info("[update] Start")

        log_stream = expand(config, old_config)
        self.api.log_stream.update(log_stream_id, log_stream)

        state = self.read(log_stream_id)
        self.log.info("[update] End")
        return state

    def delete(self, log_stream_id: str) -> None:
        self.log.info("[delete] Start")

        try:
            self.api.log_stream.delete(log_stream_id)
        except ManagementError as error:
            if not is_not_found(error):
                raise
            self.log.info("[delete] Log stream %s already deleted", log_stream_id)

        self.log.info("[delete] End")
