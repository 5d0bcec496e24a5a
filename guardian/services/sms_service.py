#This script is responsible for actually sending the sms message to the emergency contact
import logging

import vonage
from vonage_sms import SmsMessage

from guardian import config

logger = logging.getLogger(__name__)


def send_sms(to_number, message):
   if not config.VONAGE_API_KEY or not config.VONAGE_API_SECRET:
      return {"status": "error", "error": "VONAGE_API_KEY is not configured", "to": to_number}

   auth = vonage.Auth(api_key=config.VONAGE_API_KEY, api_secret=config.VONAGE_API_SECRET)
   client = vonage.Vonage(auth)

   try:
      response = client.sms.send(SmsMessage( #Sending messages
         to=to_number.lstrip("+"),
         from_=config.VONAGE_FROM_NUMBER,
         text=message,
      ))

      msg = response.messages[0]
      if msg.status == "0":
         return {
            "status": "success",
            "to": to_number
         }
      else:
         return {
            "status": "error",
            "error": getattr(msg, "error_text", None) or "Unknown error",
            "to": to_number
         }

   except Exception as e:
      logger.warning("SMS to %s failed: %s", to_number, e)
      return {"status": "error", "error": str(e), "to": to_number}
