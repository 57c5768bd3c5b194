"""
Withdraw with travel rule information
"""
import asyncio
from travelrule import APIConfig, TravelRuleClient, WithdrawalQuestionnaire


async def main():
    # Reads TRAVELRULE_API_KEY / TRAVELRULE_SECRET_KEY
    async with TravelRuleClient(APIConfig.from_env()) as client:
        await client.sync_time()
        
        questionnaire = WithdrawalQuestionnaire(
            is_address_owner=2,
            bnf_type=0,
            bnf_name="Jane Doe",
            country="FR",
            send_to=2,
            vasp="VASP_CODE",
            declaration=True
        )
        
        result = await (
            client.new_create_travel_rule_withdraw_service()
            .coin("USDT")
            .network("TRX")
            .address("TXyzDestinationAddress")
            .amount("25")
            .questionnaire(questionnaire)
            .do()
        )
        print(f"Withdraw {result.id}: accepted={result.accepted} ({result.info})")


if __name__ == "__main__":
    asyncio.run(main())
