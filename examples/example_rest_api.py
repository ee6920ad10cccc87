"""
Authenticated REST API Example

This example demonstrates the OKX private endpoints wrapped by okx_rest.
It only reads balances unless the sweep/withdrawal sections are uncommented:

Account Information:
- Get the trading account balance (optionally filtered by currency)
- List sub-accounts
- Get the funding balance of every sub-account

Asset Operations:
- Sweep a currency from all sub-accounts into the master account
- Withdrawals (commented out for safety)

Environment Variables Required (suffix is the upper-cased ENVIRONMENT):
- OKX_API_ENDPOINT_PRODUCTION: API base URL (optional)
- OKX_API_KEY_PRODUCTION: Your API key
- OKX_SECRET_KEY_PRODUCTION: Your secret key
- OKX_PASSPHRASE_PRODUCTION: Your API key passphrase
- OKX_PROXY_PRODUCTION: Forward proxy URL (optional)
"""

import asyncio

from okx_rest import OkxApiClient
from okx_rest.env_setup import setup_environment
from okx_rest.helpers import print_data


async def example_auth_rest_api() -> None:
    """Demonstrate authenticated REST API endpoints for balances and sub-accounts."""

    print("=" * 70)
    print("OKX Authenticated REST API Example")
    print("=" * 70)

    print("\n[Setup] Loading credentials from environment...")
    api_endpoint, api_key, secret_key, passphrase, proxy = setup_environment()
    print(f"[Setup] API Endpoint: {api_endpoint}")
    print(f"[Setup] Proxy: {proxy or 'none'}\n")

    async with OkxApiClient(
        api_key=api_key,
        secret_key=secret_key,
        passphrase=passphrase,
        api_url=api_endpoint,
        proxy=proxy,
    ) as okx:
        # ==================================================================
        # PART 1: ACCOUNT INFORMATION
        # ==================================================================
        print("=" * 70)
        print("PART 1: ACCOUNT INFORMATION")
        print("=" * 70)

        print("\n[1.1] Fetching Trading Account Balance...")
        balance = (await okx.get_trading_account_balance(["USDT", "BTC"])).raise_for_code()
        for account in balance.data:
            print(f"  Total Equity (USD): {account.totalEq}")
            for detail in account.details:
                print(f"  {detail.ccy}: {detail.availBal} available")

        print("\n[1.2] Listing Sub-accounts...")
        sub_accounts = (await okx.list_sub_accounts()).raise_for_code()
        print(f"\n[Sub-accounts] {len(sub_accounts.data)} sub-account(s)")
        for sub_account in sub_accounts.data:
            print(f"  {sub_account.subAcct} ({sub_account.label or 'no label'})")

        print("\n[1.3] Fetching Funding Balance of every Sub-account...")
        balances = await okx.get_all_sub_account_funding_balances()
        for name, envelope in balances.items():
            print(f"\n  {name}:")
            print_data(envelope.data)

        # ==================================================================
        # PART 2: ASSET OPERATIONS
        # ==================================================================
        print("\n" + "=" * 70)
        print("PART 2: ASSET OPERATIONS")
        print("=" * 70)
        print("\n  WARNING: Transfers and withdrawals move real funds!")

        # UNCOMMENT TO SWEEP USDT FROM EVERY SUB-ACCOUNT INTO THE MASTER:
        # --------------------------------------------------------------------
        # transfers = await okx.transfer_from_sub_accounts_to_master("USDT")
        # for name, transfer in transfers.items():
        #     print(f"  {name}: {transfer.amt} {transfer.ccy} (transId {transfer.transId})")
        # --------------------------------------------------------------------

        # UNCOMMENT AND CONFIGURE THE FOLLOWING TO TEST WITHDRAWALS:
        # --------------------------------------------------------------------
        # response = await okx.withdraw(
        #     amount="1.0",
        #     fee="0.008",
        #     currency="SOL",
        #     chain="Solana",
        #     to_address="<verified address>",
        # )
        # print(f"\n[Withdrawal Submitted] wdId {response.wdId} on {response.chain}")
        # --------------------------------------------------------------------

    print("\n" + "=" * 70)
    print("EXAMPLE COMPLETE")
    print("=" * 70)


if __name__ == "__main__":
    asyncio.run(example_auth_rest_api())
