from typing import Any, Dict, List, Optional

from assessment.commons.logger import logger
from assessment.helpers.http_transport import ApiTransport
from assessment.validation.validators import PatientsPage, validate_patients_page_or_raise


class PatientsService:
    def __init__(self, transport: ApiTransport):
        self.transport = transport
        self.pagination = transport.settings.pagination

    async def get_patients(self, page: int = 1, limit: Optional[int] = None) -> PatientsPage:
        limit = self.pagination.default_limit if limit is None else limit
        params = {"page": page, "limit": min(limit, self.pagination.max_limit)}
        body = await self.transport.get("/patients", params=params)
        return validate_patients_page_or_raise(body)

    async def get_all_patients(self) -> List[Dict[str, Any]]:
        """
        Recorre todas las paginas de forma secuencial.
        Todo o nada: cualquier error de pagina se propaga y se descarta lo acumulado.
        """
        patients: List[Dict[str, Any]] = []
        page = 1
        has_next = True

        logger.info("Fetching all patients...")
        while has_next:
            try:
                result = await self.get_patients(page, self.pagination.max_limit)
            except Exception as ex:
                logger.error(f"Error fetching page {page}: {ex}")
                raise
            patients.extend(result.data)
            logger.info(f"Page {page}: {len(result.data)} patients")

            has_next = result.has_next
            page += 1
            # Pausa entre paginas para no disparar el rate limit
            if has_next:
                await self.transport.sleep(self.pagination.page_delay_sec)

        logger.info(f"Total patients fetched: {len(patients)}")
        return patients
