import asyncio
import os
import sys
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from dotenv import load_dotenv
load_dotenv()

from card_order_qa.browser import BrowserSession
from card_order_qa.config import build_config
from card_order_qa.data import FieldKey, FormInput, VALID_PHONE, generate_date
from card_order_qa.testers import FormSession
from card_order_qa.testers.messages import NAME_FORMAT_ERROR


async def example():
    config = build_config({"base_url": os.getenv("CARD_ORDER_BASE_URL", "http://localhost:9999")}, headless=False)

    async with BrowserSession(browser_config=config.browser_config) as session:
        form = await FormSession.open(session, config)
        await form.fill_and_submit(
            FormInput(city="Москва", date=generate_date(3), name="John Smith", phone=VALID_PHONE, agree=True)
        )
        result = await form.expect_field_error(FieldKey.NAME, NAME_FORMAT_ERROR)
        print(result.message)


if __name__ == "__main__":
    asyncio.run(example())
