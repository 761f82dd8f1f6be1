"""Cross-language synonyms for common website path segments.

The dictionary maps translated spellings of typical page names (about,
contact, products, ...) to one language-neutral canonical name, so that
/es/sobre-nosotros and /en/about produce the same group key.
"""

from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from urlvariants.core.models import TranslationGroup


TRANSLATION_GROUPS: tuple[TranslationGroup, ...] = (
    TranslationGroup("about", (
        "about", "about-us", "aboutus",
        "sobre-nosotros", "sobre", "acerca-de", "acerca", "quienes-somos",  # es
        "chi-siamo", "su-di-noi", "chi-sono", "riguardo",                   # it
        "a-propos", "qui-sommes-nous",                                      # fr
        "uber-uns", "ueber-uns", "wir",                                     # de
        "sobre-nos", "quem-somos",                                          # pt
        "o-nas", "o-firme",                                                 # pl/cs
        "hakkimizda", "hakkinda",                                           # tr
        "tentang-kami", "tentang",                                          # id
    )),
    TranslationGroup("products", (
        "products", "product",
        "productos", "producto",
        "prodotti", "prodotto",
        "produits", "produit",
        "produkte", "produkt",
        "produtos", "produto",
        "produkty",
        "urunler", "urun",
    )),
    TranslationGroup("services", (
        "services", "service",
        "servicios", "servicio",
        "servizi", "servizio",
        "dienstleistungen", "dienste",
        "servicos", "servico",
        "uslugi", "usluga",
        "hizmetler", "hizmet",
    )),
    TranslationGroup("contact", (
        "contact", "contact-us", "contactus",
        "contacto", "contactanos", "contactenos",
        "contatti", "contattaci",
        "contactez-nous",
        "kontakt", "kontaktieren",
        "contato", "fale-conosco",
        "kontaktuj",
        "iletisim",
    )),
    TranslationGroup("news", (
        "news", "blog", "articles",
        "noticias", "novedades", "articulos",
        "notizie", "novita", "articoli",
        "nouvelles", "actualites",
        "nachrichten", "neuigkeiten",
        "novidades", "artigos",
        "wiadomosci", "aktualnosci",
        "haberler",
    )),
    TranslationGroup("help", (
        "help", "support", "faq",
        "ayuda", "soporte", "preguntas-frecuentes",
        "aiuto", "supporto", "domande-frequenti",
        "aide",
        "hilfe",
        "ajuda", "suporte", "perguntas-frequentes",
        "pomoc", "wsparcie",
        "yardim", "destek",
    )),
    TranslationGroup("privacy", (
        "privacy", "privacy-policy",
        "privacidad", "politica-de-privacidad",
        "politica-sulla-privacy",
        "confidentialite", "politique-de-confidentialite",
        "datenschutz", "datenschutzrichtlinie",
        "privacidade", "politica-de-privacidade",
        "prywatnosc", "polityka-prywatnosci",
        "gizlilik", "gizlilik-politikasi",
    )),
    TranslationGroup("terms", (
        "terms", "terms-of-service", "terms-and-conditions",
        "terminos", "terminos-de-servicio", "condiciones",
        "termini", "termini-di-servizio", "condizioni",
        "conditions", "conditions-utilisation",
        "bedingungen", "nutzungsbedingungen", "agb",
        "termos", "termos-de-servico", "condicoes",
        "warunki", "regulamin",
        "sartlar", "kullanim-kosullari",
    )),
    TranslationGroup("account", (
        "account", "profile", "user",
        "cuenta", "perfil", "usuario",
        "profilo", "utente",
        "compte", "profil", "utilisateur",
        "konto", "benutzer",
        "conta",
        "uzytkownik",
        "hesap", "kullanici",
    )),
    TranslationGroup("login", (
        "login", "signin", "sign-in",
        "iniciar-sesion", "ingresar", "entrar",
        "accedi", "accesso",
        "connexion", "se-connecter",
        "anmelden", "einloggen",
        "iniciar-sessao",
        "zaloguj", "logowanie",
        "giris", "giris-yap",
    )),
    TranslationGroup("signup", (
        "signup", "register", "sign-up",
        "registrarse", "registro", "crear-cuenta",
        "registrati", "registrazione", "iscriviti",
        "inscription", "sinscrire", "creer-compte",
        "registrieren", "anmelden", "konto-erstellen",
        "cadastro", "registrar", "criar-conta",
        "rejestracja", "zarejestruj",
        "kayit", "kayit-ol", "uye-ol",
    )),
    TranslationGroup("home", (
        "home", "index", "main",
        "inicio", "principal", "casa",
        "inizio", "principale",
        "accueil",
        "startseite", "hauptseite",
        "pagina-inicial",
        "strona-glowna", "start",
        "ana-sayfa", "anasayfa", "ev",
    )),
    TranslationGroup("search", (
        "search", "find",
        "buscar", "busqueda", "encontrar",
        "cerca", "ricerca", "trova",
        "recherche", "rechercher", "trouver",
        "suche", "suchen", "finden",
        "busca", "procurar",
        "szukaj", "wyszukiwanie",
        "ara", "arama", "bul",
    )),
    TranslationGroup("cart", (
        "cart", "basket", "shopping-cart",
        "carrito", "cesta", "canasta",
        "carrello", "cestino",
        "panier", "chariot",
        "warenkorb", "einkaufswagen",
        "carrinho",
        "koszyk",
        "sepet", "alisveris-sepeti",
    )),
    TranslationGroup("checkout", (
        "checkout", "payment", "pay",
        "pagar", "pago", "finalizar-compra",
        "pagamento", "paga",
        "paiement", "payer", "commander",
        "kasse", "bezahlen", "zahlung",
        "finalizar",
        "kasa", "platnosc",
        "odeme", "odemeyap",
    )),
)


def normalize_segment(segment: str) -> str:
    """Normalize a path segment for translation matching.

    Lowercases, drops "-" and "_" separators and strips a trailing "s" from
    words longer than three characters as a naive depluralization.
    """
    segment = segment.lower().replace("-", "").replace("_", "")
    if len(segment) > 3 and segment.endswith("s"):
        return segment[:-1]
    return segment


class TranslationMatcher:
    """Match path segments that are translations of each other.

    The reverse index is built once at construction and never changes, so a
    matcher can be shared freely. When two groups list the same spelling
    (German "anmelden" is both login and signup) the later group wins.
    """

    def __init__(self, groups: Iterable[TranslationGroup] = TRANSLATION_GROUPS):
        """Initialize TranslationMatcher.

        Args:
            groups: Translation groups to index
        """
        index: dict[str, str] = {}
        group_index: dict[str, TranslationGroup] = {}

        for group in groups:
            canonical = normalize_segment(group.canonical)
            group_index[canonical] = group
            for variant in group.variants:
                index[normalize_segment(variant)] = canonical

        self._index: Mapping[str, str] = MappingProxyType(index)
        self._groups: Mapping[str, TranslationGroup] = MappingProxyType(group_index)

    @property
    def index(self) -> Mapping[str, str]:
        """Read-only view of normalized variant -> canonical name."""
        return self._index

    def are_translations(self, first: str, second: str) -> bool:
        """Check if two path segments name the same concept.

        Args:
            first: Path segment
            second: Path segment

        Returns:
            True if the segments normalize to the same string or both map to
            the same canonical name
        """
        norm_first = normalize_segment(first)
        norm_second = normalize_segment(second)

        if norm_first == norm_second:
            return True

        canonical = self._index.get(norm_first)
        return canonical is not None and canonical == self._index.get(norm_second)

    def get_canonical(self, segment: str) -> str:
        """Return the canonical name of a segment.

        Known spellings map to their normalized canonical name ("productos"
        gives "product"). Unknown segments are returned exactly as given,
        without normalization.
        """
        return self._index.get(normalize_segment(segment), segment)

    def get_group(self, canonical: str) -> Optional[TranslationGroup]:
        """Look up a translation group by canonical name."""
        return self._groups.get(normalize_segment(canonical))
