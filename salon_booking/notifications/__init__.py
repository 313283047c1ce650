from salon_booking.notifications.whatsapp import WhatsAppNotifier, build_whatsapp_url

__all__ = ["WhatsAppNotifier", "build_whatsapp_url"]
