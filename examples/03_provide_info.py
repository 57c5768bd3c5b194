"""
Provide originator information for pending deposits
"""
import asyncio
from travelrule import APIConfig, DepositQuestionnaire, TravelRuleClient


async def main():
    async with TravelRuleClient(APIConfig.from_env()) as client:
        pending = await (
            client.new_list_travel_rule_deposits_service()
            .pending_questionnaire(True)
            .do()
        )
        
        # Funds received from the user's own private wallet
        questionnaire = DepositQuestionnaire(
            deposit_originator=1,
            receive_from=1,
            declaration=True
        )
        
        for deposit in pending:
            result = await (
                client.new_provide_travel_rule_deposit_info_service()
                .tran_id(deposit.tran_id)
                .questionnaire(questionnaire)
                .do()
            )
            print(f"{deposit.tran_id}: accepted={result.accepted} {result.info}")


if __name__ == "__main__":
    asyncio.run(main())
