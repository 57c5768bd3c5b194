"""
List deposits still waiting for a questionnaire
"""
import asyncio
from travelrule import APIConfig, TravelRuleClient, with_recv_window


async def main():
    async with TravelRuleClient(APIConfig.from_env()) as client:
        deposits = await (
            client.new_list_travel_rule_deposits_service()
            .pending_questionnaire(True)
            .limit(20)
            .do(with_recv_window(10000))
        )
        
        for deposit in deposits:
            print(f"{deposit.tran_id}  {deposit.amount} {deposit.coin} ({deposit.network})")


if __name__ == "__main__":
    asyncio.run(main())
