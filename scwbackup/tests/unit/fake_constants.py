# All Rights Reserved.
#
#    Licensed under the Apache License, Version 2.0 (the "License"); you may
#    not use this file except in compliance with the License. You may obtain
#    a copy of the License at
#
#         http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
#    WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
#    License for the specific language governing permissions and limitations
#    under the License.

ACCESS_KEY = 'SCWABCDEFGHIJ0123456'
SECRET_KEY = '7363616c-6577-6179-2d73-6563726b6579'
ORGANIZATION_ID = 'b3e9f1c0-3c5e-4a59-9d9a-0d4a0c5b7e21'
PROJECT_ID = 'e4a7c1d2-6f3b-4e8a-b1c9-2d5f8a7e6b30'
OTHER_ACCESS_KEY = 'SCWZYXWVUTSRQP987654'
OTHER_SECRET_KEY = '0b5c2b6e-2d5c-4d1f-8a35-6e3d3b9f4c11'
OTHER_ORGANIZATION_ID = '5d9e0b7a-1c4f-4b3e-8f2a-7c6d5e4b3a29'

ZONE = 'fr-par-1'
REGION = 'fr-par'
OTHER_ZONE = 'nl-ams-2'
OTHER_REGION = 'nl-ams'

VOLUME_ID = 'a9c3f5e2-7b1d-4c8e-9f6a-3e2d1c0b9a87'
VOLUME_NAME = 'pvc-0c5d8e7f'
SNAPSHOT_ID = '1f2e3d4c-5b6a-4978-8695-a4b3c2d1e0f9'
NEW_VOLUME_ID = '9e8d7c6b-5a49-4382-9170-6f5e4d3c2b1a'

SBS_CSI_DRIVER = 'sbs-default.csi.scaleway.com'
