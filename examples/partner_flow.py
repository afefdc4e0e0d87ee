import os
import sys
import uuid

import anyio

# Add src to path for running directly
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "../src")))

from fayda_identity import (
    ClientAuthServiceAsync,
    FaydaIdentityError,
    FaydaPartnerConfig,
    OTPRequest,
    OTPServiceAsync,
)


async def main() -> None:
    """
    Demonstrates the partner flow:
    - client id / secret key exchange for an authorization token
    - an OTP request signed by the caller
    """
    base_url = os.environ.get("FAYDA_BASE_URL", "https://auth.fayda.example")
    print(">>> Authenticating client")

    try:
        token = await ClientAuthServiceAsync(base_url).authenticate_client(
            os.environ.get("FAYDA_CLIENT_ID", "client-id"),
            os.environ.get("FAYDA_SECRET_KEY", "secret-key"),
            os.environ.get("FAYDA_APP_ID", "app-id"),
        )
    except FaydaIdentityError as e:
        # In a real run without a server, this will fail
        print(f">>> Expected failure (no real server): {e}")
        return

    config = FaydaPartnerConfig(
        base_url=base_url,
        authorization_token=token,
        fisp_license_key=os.environ.get("FAYDA_FISP_LICENSE_KEY", "license"),
        partner_id=os.environ.get("FAYDA_PARTNER_ID", "partner"),
        partner_api_key=os.environ.get("FAYDA_PARTNER_API_KEY", "api-key"),
    )
    body = OTPRequest(
        transaction_id=uuid.uuid4().hex[:10],
        env="Developer",
        domain_uri=base_url,
        individual_id="9830872690593682",
        id_type="VID",
        otp_channel="EMAIL",
    )
    # The detached JWS over the body is produced by the partner's signing key (HSM)
    signature = os.environ.get("FAYDA_SIGNATURE", "detached-jws")

    print(">>> Requesting OTP")
    response = await OTPServiceAsync(config).request_otp(body, signature)
    print(f">>> Platform response: {response}")


if __name__ == "__main__":
    anyio.run(main)
