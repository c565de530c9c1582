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


import json
import logging
from os import environ
from lib.boto3_util import create_client

DEFAULT_TIMEOUT = 10

log = logging.getLogger()


class MissingConfigurationException(Exception):
    pass


class Auth0Config(object):
    """
    Settings of the Auth0 Management API client.
        Parameters:
            domain: Auth0 tenant domain, e.g. example.eu.auth0.com
            client_id: Machine to machine application client id
            client_secret: Machine to machine application client secret
            api_token: Static Management API token. When set, the client credentials grant is skipped
            timeout: Seconds to wait for each HTTP call
    """
    def __init__(self, domain, client_id=None, client_secret=None, api_token=None, timeout=DEFAULT_TIMEOUT):
        self.domain = domain
        self.client_id = client_id
        self.client_secret = client_secret
        self.api_token = api_token
        self.timeout = timeout

    @property
    def base_url(self):
        domain = self.domain
        for scheme in ('https://', 'http://'):
            if domain.startswith(scheme):
                domain = domain[len(scheme):]
        return 'https://' + domain.rstrip('/')

    @property
    def audience(self):
        return self.base_url + '/api/v2/'


def get_secret_value(secret_arn: str) -> str:
    """
    Read the client secret from AWS Secrets Manager. The secret string is either
    the client secret itself or a JSON document with a client_secret key.
    """
    client = create_client('secretsmanager')
    secret_string = client.get_secret_value(SecretId=secret_arn)['SecretString']
    try:
        secret = json.loads(secret_string)
    except ValueError:
        return secret_string

    if isinstance(secret, dict):
        return secret.get('client_secret', '')
    return secret_string


def load_config() -> Auth0Config:
    log.debug("[auth0_config: load_config] Start")

    domain = environ.get('AUTH0_DOMAIN', '')
    if domain.strip() == '':
        raise MissingConfigurationException('AUTH0_DOMAIN is required but not configured')

    api_token = environ.get('AUTH0_API_TOKEN') or None
    client_id = environ.get('AUTH0_CLIENT_ID') or None
    client_secret = environ.get('AUTH0_CLIENT_SECRET') or None

    if client_secret is None and environ.get('AUTH0_CLIENT_SECRET_ARN'):
        log.info("[auth0_config: load_config] Reading client secret from Secrets Manager")
        client_secret = get_secret_value(environ['AUTH0_CLIENT_SECRET_ARN'])

    if api_token is None and not (client_id and client_secret):
        raise MissingConfigurationException(
            'Either AUTH0_API_TOKEN or AUTH0_CLIENT_ID with AUTH0_CLIENT_SECRET (or AUTH0_CLIENT_SECRET_ARN) is required')

    config = Auth0Config(
        domain=domain.strip(),
        client_id=client_id,
        client_secret=client_secret,
        api_token=api_token,
        timeout=int(environ.get('AUTH0_TIMEOUT', DEFAULT_TIMEOUT))
    )

    log.debug("[auth0_config: load_config] End")
    return config
